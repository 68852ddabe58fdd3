from routes.grupos import grupos_bp
from routes.renovaciones import renovaciones_bp
from routes.pagos import pagos_bp
from routes.reportes import reportes_bp

def register_routes(app):
    app.register_blueprint(grupos_bp, url_prefix='/grupos')
    app.register_blueprint(renovaciones_bp, url_prefix='/renovaciones')
    app.register_blueprint(pagos_bp, url_prefix='/pagos')
    app.register_blueprint(reportes_bp, url_prefix='/reportes')
