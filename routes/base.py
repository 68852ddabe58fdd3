from datetime import datetime
from flask import request
from errors import ValidationError


def datos_json():
    datos = request.get_json(silent=True)
    if not isinstance(datos, dict):
        raise ValidationError('No se enviaron datos JSON.')
    return datos


def campo_requerido(datos, campo):
    valor = datos.get(campo)
    if valor is None or (isinstance(valor, str) and not valor.strip()):
        raise ValidationError(f'Falta el campo requerido: {campo}')
    return valor


def entero(valor, campo):
    if isinstance(valor, bool):
        raise ValidationError(f"El campo '{campo}' debe ser un número entero.")
    try:
        return int(valor)
    except (TypeError, ValueError):
        raise ValidationError(f"El campo '{campo}' debe ser un número entero.")


def fecha(valor, campo):
    try:
        return datetime.strptime(valor, '%Y-%m-%d').date()
    except (TypeError, ValueError):
        raise ValidationError(f"El campo '{campo}' debe tener el formato AAAA-MM-DD.")


def booleano(valor, campo):
    # Solo true/false de JSON; un campo ausente equivale a false
    if valor is None:
        return False
    if not isinstance(valor, bool):
        raise ValidationError(f"El campo '{campo}' debe ser true o false.")
    return valor
