from models import db
from datetime import datetime
from decimal import Decimal
from sqlalchemy.orm import relationship, validates
from errors import ConflictError

ESTADOS_PAGO = ('pendiente', 'parcial', 'pagado')


def estado_pago(monto_pagado, monto_total):
    """Deriva el estado de un pago a partir de lo pagado y lo adeudado.

    Es la única fuente del estado: ``Pago.estado`` es una copia persistida
    de este resultado y se recalcula tras cada movimiento del libro.
    """
    pagado = Decimal(str(monto_pagado or 0))
    total = Decimal(str(monto_total or 0))
    if pagado >= total:
        return 'pagado'
    if pagado > 0:
        return 'parcial'
    return 'pendiente'


class Pago(db.Model):
    __tablename__ = 'pagos'
    __table_args__ = (
        db.CheckConstraint('monto_pagado >= 0 AND monto_pagado <= monto_total', name='ck_pagos_monto_pagado'),
    )

    id = db.Column(db.Integer, primary_key=True)
    cliente_id = db.Column(db.Integer, db.ForeignKey('clientes.id'), nullable=False)
    membresia_id = db.Column(db.Integer, db.ForeignKey('membresias.id'), nullable=True)
    monto_total = db.Column(db.Float, nullable=False, default=0.0)
    monto_pagado = db.Column(db.Float, nullable=False, default=0.0)
    nombre_membresia = db.Column(db.String(100))
    num_cuotas = db.Column(db.Integer, nullable=False, default=0)
    estado = db.Column(db.String(20), nullable=False)
    notas = db.Column(db.String(255))
    fecha_creacion = db.Column(db.DateTime, default=datetime.now, index=True)

    # Relaciones
    cliente = relationship('Cliente', back_populates='pagos')
    transacciones = relationship('Transaccion', back_populates='pago', lazy=True)

    @validates('estado')
    def _validar_estado(self, key, estado):
        # El estado nunca se fija desde fuera: debe coincidir con los montos
        esperado = estado_pago(self.monto_pagado, self.monto_total)
        if estado != esperado:
            raise ConflictError(
                f"El estado '{estado}' no corresponde a los montos del pago (se esperaba '{esperado}')"
            )
        return estado

    def recalcular_estado(self):
        self.estado = estado_pago(self.monto_pagado, self.monto_total)
        return self.estado

    @property
    def saldo_pendiente(self):
        """Monto que falta cobrar, como Decimal."""
        return Decimal(str(self.monto_total or 0)) - Decimal(str(self.monto_pagado or 0))

    def a_dict(self):
        return {
            'id': self.id,
            'cliente_id': self.cliente_id,
            'cliente_nombre': self.cliente.nombre if self.cliente else None,
            'membresia_id': self.membresia_id,
            'monto_total': self.monto_total,
            'monto_pagado': self.monto_pagado,
            'saldo_pendiente': float(self.saldo_pendiente),
            'nombre_membresia': self.nombre_membresia,
            'num_cuotas': self.num_cuotas,
            'estado': self.estado,
            'notas': self.notas,
            'fecha_creacion': self.fecha_creacion.isoformat() if self.fecha_creacion else None,
        }

    def __repr__(self):
        return f'<Pago {self.id} - {self.estado}>'
