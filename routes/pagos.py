from datetime import MINYEAR, MAXYEAR
from flask import Blueprint, request, jsonify
from errors import ValidationError
from models import ESTADOS_PAGO
from routes.base import datos_json, campo_requerido, entero, fecha
from services.pagos import listar_pagos, resumen_pagos, registrar_cuota, listar_transacciones
from utils import a_decimal

# Crear un Blueprint para la gestión de pagos
pagos_bp = Blueprint('pagos', __name__)


def filtros_de_pagos(args):
    """Traduce los parámetros de la URL a los filtros de ``listar_pagos``."""
    estado = args.get('estado')
    if estado in (None, '', 'todos'):
        estado = None
    elif estado not in ESTADOS_PAGO:
        raise ValidationError(f"Estado '{estado}' no válido.")

    filtros = {'busqueda': args.get('busqueda', '').strip(), 'estado': estado}

    if args.get('anio') or args.get('mes'):
        anio = entero(args.get('anio'), 'anio')
        mes = entero(args.get('mes'), 'mes')
        if not MINYEAR <= anio <= MAXYEAR:
            raise ValidationError(f"El campo 'anio' debe estar entre {MINYEAR} y {MAXYEAR}.")
        if not 1 <= mes <= 12:
            raise ValidationError("El campo 'mes' debe estar entre 1 y 12.")
        filtros.update(anio=anio, mes=mes)
    elif args.get('desde') or args.get('hasta'):
        desde = fecha(args.get('desde'), 'desde')
        hasta = fecha(args.get('hasta'), 'hasta')
        if desde > hasta:
            raise ValidationError("La fecha 'desde' no puede ser posterior a 'hasta'.")
        filtros.update(desde=desde, hasta=hasta)
    return filtros


# ----------------------------------------------------------------------
# LISTADO DE PAGOS CON RESUMEN
# ----------------------------------------------------------------------
@pagos_bp.route('/', methods=['GET'])
def lista_pagos():
    pagos = listar_pagos(**filtros_de_pagos(request.args))
    return jsonify({
        'pagos': [p.a_dict() for p in pagos],
        'resumen': resumen_pagos(pagos),
    })


@pagos_bp.route('/<int:pago_id>/transacciones', methods=['GET'])
def transacciones_de_pago(pago_id):
    return jsonify([t.a_dict() for t in listar_transacciones(pago_id)])


# ----------------------------------------------------------------------
# REGISTRO DE CUOTAS
# ----------------------------------------------------------------------
@pagos_bp.route('/<int:pago_id>/cuotas', methods=['POST'])
def registrar_pago_cuota(pago_id):
    datos = datos_json()
    monto = a_decimal(campo_requerido(datos, 'monto'))
    transaccion = registrar_cuota(
        pago_id,
        monto,
        metodo_pago=datos.get('metodo_pago', 'efectivo'),
        notas=datos.get('notas'),
    )
    return jsonify(transaccion.a_dict()), 201
