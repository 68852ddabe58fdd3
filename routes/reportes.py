from flask import Blueprint, request, jsonify, send_file
from routes.base import entero
from routes.pagos import filtros_de_pagos
from services.pagos import listar_pagos
from services.reportes import ingresos_mensuales, exportar_pagos_excel

reportes_bp = Blueprint('reportes', __name__)


@reportes_bp.route('/ingresos_mensuales', methods=['GET'])
def ingresos_por_mes():
    meses = entero(request.args.get('meses', 6), 'meses')
    return jsonify(ingresos_mensuales(meses))


@reportes_bp.route('/exportar_pagos', methods=['GET'])
def exportar_pagos():
    pagos = listar_pagos(**filtros_de_pagos(request.args))
    excel_stream = exportar_pagos_excel(pagos)
    return send_file(
        excel_stream,
        mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
        as_attachment=True,
        download_name='informe_pagos.xlsx'
    )
