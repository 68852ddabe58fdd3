from datetime import date
from flask import Blueprint, jsonify, current_app
from errors import ValidationError
from routes.base import datos_json, campo_requerido, entero, fecha, booleano
from services.grupos import participantes_renovacion
from services.pagos import iniciar_renovacion
from services.precios import (
    calcular_precio, cronograma_cuotas, obtener_membresia, validar_plan_cuotas, PlanCuotas,
)
from utils import a_decimal

renovaciones_bp = Blueprint('renovaciones', __name__)


def _plan_cuotas(datos):
    if not booleano(datos.get('pago_en_cuotas'), 'pago_en_cuotas'):
        return None
    return PlanCuotas(
        monto_inicial=a_decimal(datos.get('monto_adelanto', 0), 'monto de adelanto'),
        num_cuotas=entero(datos.get('num_cuotas', 1), 'num_cuotas'),
    )


# Vista previa del precio: no escribe nada
@renovaciones_bp.route('/cotizar', methods=['POST'])
def cotizar():
    datos = datos_json()
    membresia = obtener_membresia(entero(campo_requerido(datos, 'membresia_id'), 'membresia_id'))
    modo_grupal = booleano(datos.get('modo_grupal'), 'modo_grupal')
    participantes = entero(datos.get('participantes', 1), 'participantes')
    if participantes < 1:
        raise ValidationError('Debe haber al menos un participante.')

    desglose = calcular_precio(membresia, participantes, modo_grupal)
    respuesta = desglose.a_dict()

    plan = _plan_cuotas(datos)
    if plan is not None:
        validar_plan_cuotas(plan, desglose.total)
        saldo = desglose.total - plan.monto_inicial
        respuesta['saldo_pendiente'] = float(max(saldo, 0))
        respuesta['cronograma'] = [
            {'numero': c['numero'], 'fecha': c['fecha'].isoformat(), 'monto': float(round(c['monto'], 2))}
            for c in cronograma_cuotas(saldo, plan.num_cuotas, date.today())
        ]
    return jsonify(respuesta)


@renovaciones_bp.route('/', methods=['POST'])
def renovar():
    datos = datos_json()
    pagador_id = entero(campo_requerido(datos, 'pagador_id'), 'pagador_id')
    membresia = obtener_membresia(entero(campo_requerido(datos, 'membresia_id'), 'membresia_id'))
    modo_grupal = booleano(datos.get('modo_grupal'), 'modo_grupal')
    fecha_inicio = fecha(datos['fecha_inicio'], 'fecha_inicio') if datos.get('fecha_inicio') else date.today()
    seleccionados = [entero(i, 'miembros') for i in datos.get('miembros') or []]

    participantes = participantes_renovacion(pagador_id, seleccionados, modo_grupal)
    desglose = calcular_precio(membresia, len(participantes), modo_grupal)
    if desglose.advertencia:
        current_app.logger.warning(f'Renovación del cliente {pagador_id}: {desglose.advertencia}')

    pago = iniciar_renovacion(
        pagador_id,
        participantes,
        membresia,
        fecha_inicio,
        desglose,
        plan_cuotas=_plan_cuotas(datos),
        metodo_pago=datos.get('metodo_pago', 'efectivo'),
        modo_grupal=modo_grupal,
    )
    return jsonify({
        'pago': pago.a_dict(),
        'desglose': desglose.a_dict(),
        'participantes': participantes,
    }), 201
