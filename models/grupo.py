from models import db
from datetime import datetime

class Grupo(db.Model):
    __tablename__ = 'grupos'

    id = db.Column(db.Integer, primary_key=True)
    nombre = db.Column(db.String(100), nullable=False)
    # Un cliente lidera como máximo un grupo
    lider_id = db.Column(db.Integer, unique=True, nullable=False, index=True)
    fecha_creacion = db.Column(db.DateTime, default=datetime.now)

    clientes = db.relationship('Cliente', backref='grupo', lazy=True, order_by='Cliente.id')

    def a_dict(self):
        return {
            'id': self.id,
            'nombre': self.nombre,
            'lider_id': self.lider_id,
            'fecha_creacion': self.fecha_creacion.isoformat() if self.fecha_creacion else None,
        }

    def __repr__(self):
        return f'<Grupo {self.nombre}>'
