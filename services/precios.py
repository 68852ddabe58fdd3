from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal
from typing import Optional
from errors import ValidationError, NotFoundError
from models import db, Membresia

# Descuento grupal por número de participantes (solo membresías mensuales)
DESCUENTOS_GRUPALES = {
    2: Decimal('0.08'),
    3: Decimal('0.12'),
}
DESCUENTO_MAXIMO = Decimal('0.16')  # 4 o más participantes

MAX_CUOTAS = 2
DIAS_ENTRE_CUOTAS = 7

ADVERTENCIA_NO_MENSUAL = 'El descuento grupal solo aplica para membresías mensuales.'


@dataclass(frozen=True)
class DesglosePrecio:
    subtotal: Decimal
    tasa_descuento: Decimal
    monto_descuento: Decimal
    total: Decimal
    advertencia: Optional[str] = None

    def a_dict(self):
        return {
            'subtotal': float(self.subtotal),
            'tasa_descuento': float(self.tasa_descuento),
            'monto_descuento': float(self.monto_descuento),
            'total': float(self.total),
            'advertencia': self.advertencia,
        }


@dataclass(frozen=True)
class PlanCuotas:
    monto_inicial: Decimal
    num_cuotas: int


def es_mensual(membresia):
    if membresia.descuento_grupal is not None:
        return membresia.descuento_grupal
    # Clasificación heredada por texto libre
    return 'mensual' in (membresia.modalidad or '').lower() or 'mensual' in (membresia.tipo or '').lower()


def tasa_descuento(participantes):
    if participantes >= 4:
        return DESCUENTO_MAXIMO
    return DESCUENTOS_GRUPALES.get(participantes, Decimal('0'))


def calcular_precio(membresia, participantes, modo_grupal):
    """Calcula subtotal, descuento grupal y total de una renovación.

    Función pura: el mismo cálculo sirve para la renovación individual y la
    grupal. El descuento solo se aplica en modo grupal y con membresías
    mensuales; si el plan no es mensual se devuelve una advertencia.
    """
    if membresia is None or membresia.precio is None:
        raise ValueError('Se requiere una membresía con precio')

    precio = Decimal(str(membresia.precio))
    mensual = es_mensual(membresia)

    subtotal = precio * participantes if modo_grupal else precio
    tasa = tasa_descuento(participantes) if modo_grupal and mensual else Decimal('0')
    monto_descuento = subtotal * tasa

    advertencia = None
    if modo_grupal and not mensual and participantes >= 2:
        advertencia = ADVERTENCIA_NO_MENSUAL

    return DesglosePrecio(
        subtotal=subtotal,
        tasa_descuento=tasa,
        monto_descuento=monto_descuento,
        total=subtotal - monto_descuento,
        advertencia=advertencia,
    )


def validar_plan_cuotas(plan, total):
    if plan.monto_inicial < 0:
        raise ValidationError('El monto de adelanto no puede ser negativo.')
    if plan.monto_inicial > Decimal(str(total)):
        raise ValidationError(f'El adelanto no puede ser mayor a S/ {Decimal(str(total)):.2f}')
    if not 1 <= plan.num_cuotas <= MAX_CUOTAS:
        raise ValidationError(f'El número de cuotas debe estar entre 1 y {MAX_CUOTAS}.')


def cronograma_cuotas(saldo, num_cuotas, desde):
    """Reparte el saldo en cuotas semanales iguales a partir de ``desde``."""
    saldo = Decimal(str(saldo))
    if saldo <= 0 or num_cuotas < 1:
        return []
    monto = saldo / num_cuotas
    return [
        {'numero': i, 'fecha': desde + timedelta(days=DIAS_ENTRE_CUOTAS * i), 'monto': monto}
        for i in range(1, num_cuotas + 1)
    ]


def notas_renovacion(desglose, participantes, modo_grupal):
    if desglose.tasa_descuento > 0:
        return f'Descuento Grupal {desglose.tasa_descuento * 100:.0f}% aplicado ({participantes} miembros)'
    if modo_grupal:
        return f'Renovación Grupal ({participantes} miembros)'
    return 'Renovación de membresía'


def obtener_membresia(membresia_id):
    membresia = db.session.get(Membresia, membresia_id)
    if membresia is None:
        raise NotFoundError(f'Membresía {membresia_id} no encontrada.')
    return membresia
