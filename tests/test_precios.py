import pytest
from datetime import date
from decimal import Decimal
from errors import ValidationError
from models import Membresia
from services.precios import (
    calcular_precio, tasa_descuento, es_mensual, validar_plan_cuotas, cronograma_cuotas,
    notas_renovacion, PlanCuotas, ADVERTENCIA_NO_MENSUAL,
)


def _membresia(precio=100.0, tipo='Mensual', modalidad='Mensual', descuento_grupal=None):
    return Membresia(nombre='Plan', precio=precio, tipo=tipo, modalidad=modalidad,
                     duracion=1, descuento_grupal=descuento_grupal)


@pytest.mark.parametrize('participantes, tasa', [
    (1, Decimal('0')),
    (2, Decimal('0.08')),
    (3, Decimal('0.12')),
    (4, Decimal('0.16')),
    (9, Decimal('0.16')),
])
def test_tasa_descuento_por_participantes(participantes, tasa):
    assert tasa_descuento(participantes) == tasa

    desglose = calcular_precio(_membresia(), participantes, modo_grupal=True)
    assert desglose.tasa_descuento == tasa
    assert desglose.total == desglose.subtotal * (1 - tasa)


def test_grupo_mensual_de_tres():
    desglose = calcular_precio(_membresia(), 3, modo_grupal=True)

    assert desglose.subtotal == Decimal('300')
    assert desglose.tasa_descuento == Decimal('0.12')
    assert desglose.monto_descuento == Decimal('36')
    assert desglose.total == Decimal('264')
    assert desglose.advertencia is None


def test_grupo_no_mensual_sin_descuento_con_advertencia():
    desglose = calcular_precio(_membresia(tipo='Trimestral', modalidad='Trimestral'), 3, modo_grupal=True)

    assert desglose.tasa_descuento == 0
    assert desglose.total == Decimal('300')
    assert desglose.advertencia == ADVERTENCIA_NO_MENSUAL


def test_no_mensual_con_un_participante_no_advierte():
    desglose = calcular_precio(_membresia(tipo='Anual', modalidad='Anual'), 1, modo_grupal=True)
    assert desglose.advertencia is None


def test_renovacion_individual_ignora_participantes():
    desglose = calcular_precio(_membresia(), 4, modo_grupal=False)

    assert desglose.subtotal == Decimal('100')
    assert desglose.tasa_descuento == 0
    assert desglose.total == Decimal('100')
    assert desglose.advertencia is None


def test_total_sin_redondeo_intermedio():
    desglose = calcular_precio(_membresia(precio=33.33), 2, modo_grupal=True)

    assert desglose.subtotal == Decimal('66.66')
    assert desglose.monto_descuento == Decimal('5.3328')
    assert desglose.total == Decimal('61.3272')


def test_es_mensual_por_texto_sin_importar_mayusculas():
    assert es_mensual(_membresia(tipo='PLAN MENSUAL', modalidad='Libre'))
    assert es_mensual(_membresia(tipo='Libre', modalidad='Bimensual'))
    assert not es_mensual(_membresia(tipo='Anual', modalidad=None))


def test_marca_explicita_prevalece_sobre_el_texto():
    assert not es_mensual(_membresia(descuento_grupal=False))
    assert es_mensual(_membresia(tipo='Anual', modalidad='Anual', descuento_grupal=True))

    desglose = calcular_precio(_membresia(descuento_grupal=False), 2, modo_grupal=True)
    assert desglose.tasa_descuento == 0


def test_a_dict_convierte_a_float():
    datos = calcular_precio(_membresia(), 2, modo_grupal=True).a_dict()
    assert datos == {
        'subtotal': 200.0,
        'tasa_descuento': 0.08,
        'monto_descuento': 16.0,
        'total': 184.0,
        'advertencia': None,
    }


@pytest.mark.parametrize('plan', [
    PlanCuotas(monto_inicial=Decimal('-1'), num_cuotas=1),
    PlanCuotas(monto_inicial=Decimal('264.01'), num_cuotas=1),
    PlanCuotas(monto_inicial=Decimal('50'), num_cuotas=0),
    PlanCuotas(monto_inicial=Decimal('50'), num_cuotas=3),
])
def test_plan_de_cuotas_invalido(plan):
    with pytest.raises(ValidationError):
        validar_plan_cuotas(plan, Decimal('264'))


def test_plan_de_cuotas_valido():
    validar_plan_cuotas(PlanCuotas(monto_inicial=Decimal('0'), num_cuotas=2), Decimal('264'))
    validar_plan_cuotas(PlanCuotas(monto_inicial=Decimal('264'), num_cuotas=1), Decimal('264'))


def test_cronograma_semanal():
    cronograma = cronograma_cuotas(Decimal('164'), 2, date(2026, 1, 1))

    assert [c['numero'] for c in cronograma] == [1, 2]
    assert [c['fecha'] for c in cronograma] == [date(2026, 1, 8), date(2026, 1, 15)]
    assert [c['monto'] for c in cronograma] == [Decimal('82'), Decimal('82')]


def test_cronograma_sin_saldo():
    assert cronograma_cuotas(Decimal('0'), 2, date(2026, 1, 1)) == []


def test_notas_de_renovacion():
    con_descuento = calcular_precio(_membresia(), 3, modo_grupal=True)
    sin_descuento = calcular_precio(_membresia(tipo='Anual', modalidad='Anual'), 3, modo_grupal=True)
    individual = calcular_precio(_membresia(), 1, modo_grupal=False)

    assert notas_renovacion(con_descuento, 3, True) == 'Descuento Grupal 12% aplicado (3 miembros)'
    assert notas_renovacion(sin_descuento, 3, True) == 'Renovación Grupal (3 miembros)'
    assert notas_renovacion(individual, 1, False) == 'Renovación de membresía'


def test_precio_requiere_membresia_con_precio():
    with pytest.raises(ValueError):
        calcular_precio(None, 1, modo_grupal=False)
    with pytest.raises(ValueError):
        calcular_precio(_membresia(precio=None), 1, modo_grupal=False)
