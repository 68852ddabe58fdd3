import os
from flask import Flask, jsonify
from flask_migrate import Migrate
from sqlalchemy.exc import SQLAlchemyError
from config import Config
from errors import GimnasioError
from models import db
from routes import register_routes
from utils import inicializar_membresias

def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config['LOG_LEVEL'])

    db.init_app(app)
    Migrate(app, db)

    # Todos los errores del dominio llegan a la interfaz como JSON
    @app.errorhandler(GimnasioError)
    def manejar_error(error):
        if error.status_code >= 500:
            app.logger.error(f'{type(error).__name__}: {error.mensaje}')
        else:
            app.logger.warning(f'{type(error).__name__}: {error.mensaje}')
        return jsonify({'error': error.mensaje}), error.status_code

    @app.errorhandler(SQLAlchemyError)
    def manejar_error_de_base_de_datos(error):
        db.session.rollback()
        app.logger.error(f'Error de base de datos: {error}', exc_info=True)
        return jsonify({'error': 'Base de datos no disponible'}), 503

    # Registro de rutas (blueprints)
    register_routes(app)

    # Crear tablas y cargar el catálogo de membresías
    with app.app_context():
        if app.config.get('CREAR_TABLAS'):
            uri = app.config['SQLALCHEMY_DATABASE_URI']
            if uri.startswith('sqlite:///'):
                os.makedirs(os.path.dirname(uri[len('sqlite:///'):]) or '.', exist_ok=True)
            db.create_all()
        inicializar_membresias(app.config.get('CATALOGO_MEMBRESIAS', []))

    return app

if __name__ == '__main__':
    app = create_app()
    app.run(debug=True)
