from contextlib import contextmanager
from datetime import date
from decimal import Decimal, InvalidOperation
from dateutil.relativedelta import relativedelta
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from unidecode import unidecode
from errors import StoreError, ValidationError
from models import db, Membresia


@contextmanager
def unidad_de_trabajo(descripcion):
    """Ejecuta un bloque de escrituras como una sola transacción.

    Confirma al salir sin errores; ante cualquier excepción revierte todo lo
    escrito en la sesión, de modo que ningún cambio parcial sea visible.
    Los errores de la base de datos se propagan como ``StoreError``.
    """
    try:
        yield db.session
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error en '{descripcion}', cambios revertidos: {e}", exc_info=True)
        raise StoreError(f'No se pudo completar {descripcion}: {e}') from e
    except Exception:
        db.session.rollback()
        current_app.logger.warning(f"'{descripcion}' cancelada, cambios revertidos")
        raise


def sumar_meses(fecha, meses):
    # Meses calendario: 31 de enero + 1 mes = 28/29 de febrero
    return fecha + relativedelta(months=meses)


def inicio_de_mes(fecha):
    return date(fecha.year, fecha.month, 1)


def fin_de_mes(fecha):
    return fecha + relativedelta(day=31)


def clave_mes(fecha):
    """Clave canónica 'YYYY-MM', independiente del idioma de presentación."""
    return f'{fecha.year:04d}-{fecha.month:02d}'


def normalizar_texto(texto):
    return unidecode(texto or '').strip().lower()


def inicializar_membresias(catalogo):
    for datos in catalogo:
        if not Membresia.query.filter_by(nombre=datos['nombre']).first():
            db.session.add(Membresia(**datos))
    db.session.commit()
    current_app.logger.info(f'Catálogo de membresías inicializado ({len(catalogo)} planes).')


def a_decimal(valor, campo='monto'):
    numero = None
    if valor is not None and not isinstance(valor, bool):
        try:
            numero = Decimal(str(valor))
        except InvalidOperation:
            numero = None
    if numero is None or not numero.is_finite():
        raise ValidationError(f"El {campo} '{valor}' no es un número válido.")
    return numero
