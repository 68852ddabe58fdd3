import pytest
from datetime import datetime
from app import create_app
from config import TestingConfig
from models import db, Cliente, Membresia, Pago, Transaccion


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def crear_cliente(app):
    def _crear(nombre='Cliente', **kwargs):
        cliente = Cliente(nombre=nombre, **kwargs)
        db.session.add(cliente)
        db.session.commit()
        return cliente
    return _crear


@pytest.fixture
def membresia_mensual(app):
    membresia = Membresia(nombre='Mensual Libre', precio=100.0, tipo='Mensual', modalidad='Mensual', duracion=1)
    db.session.add(membresia)
    db.session.commit()
    return membresia


@pytest.fixture
def membresia_trimestral(app):
    membresia = Membresia(nombre='Trimestral', precio=100.0, tipo='Trimestral', modalidad='Trimestral', duracion=3)
    db.session.add(membresia)
    db.session.commit()
    return membresia


@pytest.fixture
def crear_pago(app):
    """Inserta un pago y sus transacciones directamente, sin pasar por la renovación."""
    def _crear(cliente, monto_total, transacciones=(), fecha_creacion=None, nombre_membresia='Mensual Libre'):
        pagado = sum(monto for monto, _ in transacciones)
        pago = Pago(
            cliente_id=cliente.id,
            monto_total=monto_total,
            monto_pagado=pagado,
            nombre_membresia=nombre_membresia,
            fecha_creacion=fecha_creacion or datetime.now(),
        )
        pago.recalcular_estado()
        db.session.add(pago)
        db.session.flush()
        for monto, fecha in transacciones:
            db.session.add(Transaccion(
                pago_id=pago.id,
                cliente_id=cliente.id,
                monto=monto,
                tipo='pago_completo',
                metodo_pago='efectivo',
                fecha_transaccion=fecha,
            ))
        db.session.commit()
        return pago
    return _crear
