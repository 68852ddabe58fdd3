from datetime import date, datetime, time
from io import BytesIO
from decimal import Decimal
from openpyxl import Workbook
from openpyxl.styles import Font
from errors import ValidationError
from models import Transaccion
from utils import sumar_meses, inicio_de_mes, clave_mes

# Diez años de historia como máximo
MAX_MESES_REPORTE = 120


def ingresos_mensuales(meses=6, hoy=None):
    """Suma los ingresos por mes de los últimos ``meses`` meses (incluido el actual).

    Cada mes aparece aunque no tenga transacciones, con total 0, y se agrupa
    por la clave canónica 'YYYY-MM' en orden cronológico.
    """
    if not 1 <= meses <= MAX_MESES_REPORTE:
        raise ValidationError(f'El número de meses debe estar entre 1 y {MAX_MESES_REPORTE}.')

    hoy = hoy or date.today()
    primer_mes = sumar_meses(inicio_de_mes(hoy), -(meses - 1))
    fin = sumar_meses(inicio_de_mes(hoy), 1)

    ingresos = {clave_mes(sumar_meses(primer_mes, i)): Decimal('0') for i in range(meses)}

    transacciones = Transaccion.query.filter(
        Transaccion.fecha_transaccion >= datetime.combine(primer_mes, time.min),
        Transaccion.fecha_transaccion < datetime.combine(fin, time.min),
    ).all()
    for t in transacciones:
        clave = clave_mes(t.fecha_transaccion)
        if clave in ingresos:
            ingresos[clave] += Decimal(str(t.monto))

    return [{'mes': clave, 'total': float(total)} for clave, total in sorted(ingresos.items())]


def exportar_pagos_excel(pagos):
    # 1. Crear el libro de Excel en memoria
    wb = Workbook()
    ws = wb.active
    ws.title = "Pagos"

    headers = [
        'ID del Pago', 'Cliente', 'Membresía', 'Monto Total', 'Monto Pagado',
        'Saldo Pendiente', 'Estado', 'N° de Cuotas', 'Fecha', 'Notas'
    ]
    ws.append(headers)
    for celda in ws[1]:
        celda.font = Font(bold=True)

    # 2. Una fila por pago
    for pago in pagos:
        ws.append([
            pago.id,
            pago.cliente.nombre if pago.cliente else '',
            pago.nombre_membresia or '',
            pago.monto_total,
            pago.monto_pagado,
            float(pago.saldo_pendiente),
            pago.estado,
            pago.num_cuotas,
            pago.fecha_creacion.strftime('%Y-%m-%d') if pago.fecha_creacion else '',
            pago.notas or ''
        ])

    # 3. Preparar el archivo para el envío
    excel_stream = BytesIO()
    wb.save(excel_stream)
    excel_stream.seek(0)
    return excel_stream
