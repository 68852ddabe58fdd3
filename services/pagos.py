from datetime import date, datetime, time
from decimal import Decimal
from flask import current_app
from sqlalchemy import desc
from errors import ValidationError, NotFoundError
from models import db, Pago, Transaccion
from services.grupos import obtener_cliente
from services.precios import validar_plan_cuotas, notas_renovacion
from utils import unidad_de_trabajo, sumar_meses, fin_de_mes, normalizar_texto, a_decimal

METODOS_PAGO = ('efectivo', 'tarjeta', 'transferencia', 'yape', 'plin')


def validar_metodo_pago(metodo_pago):
    if metodo_pago not in METODOS_PAGO:
        raise ValidationError(f"Método de pago '{metodo_pago}' no válido. Opciones: {', '.join(METODOS_PAGO)}.")


def obtener_pago(pago_id):
    pago = db.session.get(Pago, pago_id)
    if pago is None:
        raise NotFoundError(f'Pago {pago_id} no encontrado.')
    return pago


def iniciar_renovacion(pagador_id, participantes_ids, membresia, fecha_inicio, desglose,
                       plan_cuotas=None, metodo_pago='efectivo', modo_grupal=None):
    """Renueva la membresía de uno o varios clientes y registra un único pago.

    Todos los participantes reciben el nuevo plan y quedan activos; se crea un
    solo ``Pago`` a nombre del pagador por el total del desglose y, si se
    cobró algo en el momento, la transacción inicial (adelanto o pago
    completo). Todo ocurre en una sola transacción: si cualquier paso falla,
    ningún cliente queda renovado y no existe el pago.
    """
    ids = list(dict.fromkeys(participantes_ids or []))
    if not ids:
        raise ValidationError('Selecciona al menos un cliente a renovar.')
    validar_metodo_pago(metodo_pago)
    if plan_cuotas is not None:
        validar_plan_cuotas(plan_cuotas, desglose.total)

    pagador = obtener_cliente(pagador_id)
    clientes = [obtener_cliente(i) for i in ids]
    if modo_grupal is None:
        modo_grupal = len(clientes) > 1

    fecha_fin = sumar_meses(fecha_inicio, membresia.duracion) if membresia.duracion else None
    total = desglose.total
    monto_inicial = plan_cuotas.monto_inicial if plan_cuotas is not None else total
    notas = notas_renovacion(desglose, len(clientes), modo_grupal)

    with unidad_de_trabajo('la renovación de membresía'):
        # 1. Actualizar todos los clientes con la nueva membresía
        for cliente in clientes:
            cliente.membresia_id = membresia.id
            cliente.nombre_membresia = membresia.nombre
            cliente.tipo_membresia = membresia.modalidad
            cliente.fecha_inicio = fecha_inicio
            cliente.fecha_fin = fecha_fin
            cliente.estado = 'activa'
        db.session.flush()

        # 2. Un solo pago a nombre del pagador
        pago = Pago(
            cliente_id=pagador.id,
            membresia_id=membresia.id,
            monto_total=float(total),
            monto_pagado=float(monto_inicial),
            nombre_membresia=membresia.nombre,
            num_cuotas=plan_cuotas.num_cuotas if plan_cuotas is not None else 0,
            notas=notas,
        )
        pago.recalcular_estado()
        db.session.add(pago)
        db.session.flush()

        # 3. Transacción inicial
        if monto_inicial > 0:
            db.session.add(Transaccion(
                pago_id=pago.id,
                cliente_id=pagador.id,
                monto=float(monto_inicial),
                tipo='adelanto' if plan_cuotas is not None else 'pago_completo',
                metodo_pago=metodo_pago,
                notas=notas,
            ))

    current_app.logger.info(
        f'Renovación registrada: pago {pago.id} de S/ {total:.2f} '
        f'({len(clientes)} clientes, estado {pago.estado}).'
    )
    return pago


def registrar_cuota(pago_id, monto, metodo_pago='efectivo', notas=None):
    monto = a_decimal(monto)
    if monto <= 0:
        raise ValidationError('Ingresa un monto válido.')
    validar_metodo_pago(metodo_pago)

    pago = obtener_pago(pago_id)
    saldo = pago.saldo_pendiente
    if monto > saldo:
        raise ValidationError(
            f'El monto no puede ser mayor a S/ {saldo:.2f} (exceeds outstanding balance).'
        )

    with unidad_de_trabajo('el registro de la cuota'):
        numero_cuota = len([t for t in pago.transacciones if t.tipo == 'cuota']) + 1
        transaccion = Transaccion(
            pago_id=pago.id,
            cliente_id=pago.cliente_id,
            monto=float(monto),
            tipo='cuota',
            numero_cuota=numero_cuota,
            metodo_pago=metodo_pago,
            notas=notas or None,
        )
        db.session.add(transaccion)
        pago.monto_pagado = float(Decimal(str(pago.monto_pagado)) + monto)
        pago.recalcular_estado()

    current_app.logger.info(
        f'Cuota {numero_cuota} de S/ {monto:.2f} registrada en el pago {pago.id} (estado {pago.estado}).'
    )
    return transaccion


def listar_transacciones(pago_id):
    pago = obtener_pago(pago_id)
    return sorted(pago.transacciones, key=lambda t: (t.fecha_transaccion, t.id), reverse=True)


def listar_pagos(busqueda=None, estado=None, anio=None, mes=None, desde=None, hasta=None):
    query = Pago.query.join(Pago.cliente)

    if estado:
        query = query.filter(Pago.estado == estado)

    if anio is not None and mes is not None:
        try:
            inicio = date(anio, mes, 1)
        except ValueError:
            raise ValidationError(f"El mes {mes}/{anio} no es válido.")
        query = query.filter(
            Pago.fecha_creacion >= datetime.combine(inicio, time.min),
            Pago.fecha_creacion <= datetime.combine(fin_de_mes(inicio), time.max),
        )
    elif desde and hasta:
        # El rango cubre los días completos
        query = query.filter(
            Pago.fecha_creacion >= datetime.combine(desde, time.min),
            Pago.fecha_creacion <= datetime.combine(hasta, time.max),
        )

    pagos = query.order_by(desc(Pago.fecha_creacion), desc(Pago.id)).all()

    filtro = normalizar_texto(busqueda)
    if filtro:
        pagos = [
            p for p in pagos
            if filtro in normalizar_texto(p.cliente.nombre) or filtro in normalizar_texto(p.nombre_membresia)
        ]
    return pagos


def resumen_pagos(pagos):
    total_pendiente = sum((p.saldo_pendiente for p in pagos), Decimal('0'))
    total_cobrado = sum((Decimal(str(p.monto_pagado)) for p in pagos), Decimal('0'))
    return {
        'total_pendiente': float(total_pendiente),
        'total_cobrado': float(total_cobrado),
        'clientes_con_deuda': len([p for p in pagos if p.estado != 'pagado']),
        'pagos_completos': len([p for p in pagos if p.estado == 'pagado']),
    }
