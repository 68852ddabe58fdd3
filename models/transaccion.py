from models import db
from datetime import datetime
from sqlalchemy import event
from sqlalchemy.orm import relationship, object_session
from errors import ConflictError

TIPOS_TRANSACCION = ('adelanto', 'cuota', 'pago_completo')

class Transaccion(db.Model):
    __tablename__ = 'transacciones'
    __table_args__ = (
        db.CheckConstraint('monto > 0', name='ck_transacciones_monto'),
        db.CheckConstraint("tipo IN ('adelanto', 'cuota', 'pago_completo')", name='ck_transacciones_tipo'),
    )

    id = db.Column(db.Integer, primary_key=True)
    pago_id = db.Column(db.Integer, db.ForeignKey('pagos.id'), nullable=False, index=True)
    cliente_id = db.Column(db.Integer, db.ForeignKey('clientes.id'), nullable=False)
    monto = db.Column(db.Float, nullable=False)
    tipo = db.Column(db.String(20), nullable=False)
    numero_cuota = db.Column(db.Integer, nullable=True)  # solo para tipo 'cuota'
    metodo_pago = db.Column(db.String(30), nullable=False, default='efectivo')
    fecha_transaccion = db.Column(db.DateTime, default=datetime.now, nullable=False, index=True)
    notas = db.Column(db.String(255))

    # Relaciones
    pago = relationship('Pago', back_populates='transacciones')

    def a_dict(self):
        return {
            'id': self.id,
            'pago_id': self.pago_id,
            'cliente_id': self.cliente_id,
            'monto': self.monto,
            'tipo': self.tipo,
            'numero_cuota': self.numero_cuota,
            'metodo_pago': self.metodo_pago,
            'fecha_transaccion': self.fecha_transaccion.isoformat() if self.fecha_transaccion else None,
            'notas': self.notas,
        }

    def __repr__(self):
        return f'<Transaccion {self.id} - {self.tipo} S/{self.monto}>'


# El libro es de solo inserción
@event.listens_for(Transaccion, 'before_update')
def _impedir_modificacion(mapper, connection, target):
    session = object_session(target)
    if session is not None and session.is_modified(target, include_collections=False):
        raise ConflictError(f'La transacción {target.id} no puede modificarse')


@event.listens_for(Transaccion, 'before_delete')
def _impedir_eliminacion(mapper, connection, target):
    raise ConflictError(f'La transacción {target.id} no puede eliminarse')
