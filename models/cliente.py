from models import db
from sqlalchemy.orm import relationship

ESTADOS_CLIENTE = ('activa', 'vencida', 'inactiva')

class Cliente(db.Model):
    __tablename__ = 'clientes'

    id = db.Column(db.Integer, primary_key=True)
    nombre = db.Column(db.String(150), nullable=False)
    membresia_id = db.Column(db.Integer, db.ForeignKey('membresias.id'), nullable=True)
    nombre_membresia = db.Column(db.String(100))
    tipo_membresia = db.Column(db.String(50))
    fecha_inicio = db.Column(db.Date, nullable=True)
    fecha_fin = db.Column(db.Date, nullable=True)
    estado = db.Column(db.String(20), nullable=False, default='inactiva')

    # Referencia inversa al grupo: un cliente pertenece a un solo grupo a la vez
    grupo_id = db.Column(db.Integer, db.ForeignKey('grupos.id'), nullable=True, index=True)

    pagos = relationship('Pago', back_populates='cliente')

    def a_dict(self):
        return {
            'id': self.id,
            'nombre': self.nombre,
            'membresia_id': self.membresia_id,
            'nombre_membresia': self.nombre_membresia,
            'tipo_membresia': self.tipo_membresia,
            'fecha_inicio': self.fecha_inicio.isoformat() if self.fecha_inicio else None,
            'fecha_fin': self.fecha_fin.isoformat() if self.fecha_fin else None,
            'estado': self.estado,
            'grupo_id': self.grupo_id,
        }

    def __repr__(self):
        return f'<Cliente {self.nombre}>'
