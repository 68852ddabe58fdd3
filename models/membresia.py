from models import db

class Membresia(db.Model):
    __tablename__ = 'membresias'

    id = db.Column(db.Integer, primary_key=True)
    nombre = db.Column(db.String(100), unique=True, nullable=False)
    precio = db.Column(db.Float, nullable=False)
    tipo = db.Column(db.String(50), nullable=False, default='')
    modalidad = db.Column(db.String(50), nullable=False, default='')
    duracion = db.Column(db.Integer, nullable=True)  # en meses

    # Marca explícita de elegibilidad al descuento grupal.
    # NULL = se deduce de modalidad/tipo (ver services.precios.es_mensual)
    descuento_grupal = db.Column(db.Boolean, nullable=True)

    def __repr__(self):
        return f'<Membresia {self.nombre} - S/{self.precio}>'
