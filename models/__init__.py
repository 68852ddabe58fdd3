from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

from models.membresia import Membresia
from models.grupo import Grupo
from models.cliente import Cliente
from models.pago import Pago, estado_pago, ESTADOS_PAGO
from models.transaccion import Transaccion
