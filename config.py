import os

class Config:
    BASE_DIR = os.path.abspath(os.path.dirname(__file__))
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        'DATABASE_URL', 'sqlite:///' + os.path.join(BASE_DIR, 'database', 'gimnasio.db')
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Ninguna llamada a la base de datos debe quedar bloqueada indefinidamente
    DATABASE_TIMEOUT = int(os.environ.get('DATABASE_TIMEOUT', 10))
    if SQLALCHEMY_DATABASE_URI.startswith('sqlite'):
        SQLALCHEMY_ENGINE_OPTIONS = {'connect_args': {'timeout': DATABASE_TIMEOUT}}
    else:
        SQLALCHEMY_ENGINE_OPTIONS = {'connect_args': {'connect_timeout': DATABASE_TIMEOUT}}
    SECRET_KEY = os.environ.get('SECRET_KEY') or os.urandom(24)
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    CREAR_TABLAS = True

    # Catálogo de membresías disponibles para renovar.
    # 'descuento_grupal' marca explícitamente los planes con descuento de grupo;
    # si se omite se usa la modalidad/tipo ("mensual").
    CATALOGO_MEMBRESIAS = [
        {'nombre': 'Mensual Libre', 'precio': 100.0, 'tipo': 'Mensual', 'modalidad': 'Mensual', 'duracion': 1},
        {'nombre': 'Trimestral', 'precio': 270.0, 'tipo': 'Trimestral', 'modalidad': 'Trimestral', 'duracion': 3},
        {'nombre': 'Anual', 'precio': 960.0, 'tipo': 'Anual', 'modalidad': 'Anual', 'duracion': 12},
    ]

class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = 'DEBUG'

class ProductionConfig(Config):
    DEBUG = False

class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    CATALOGO_MEMBRESIAS = []
