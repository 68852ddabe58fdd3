from flask import Blueprint, request, jsonify
from routes.base import datos_json, campo_requerido, entero
from services import grupos as servicio

grupos_bp = Blueprint('grupos', __name__)


@grupos_bp.route('/cliente/<int:cliente_id>', methods=['GET'])
def grupo_de_cliente(cliente_id):
    contexto = servicio.resolver_grupo(cliente_id)
    if contexto is None:
        return jsonify({'grupo': None, 'miembros': [], 'es_lider': False})

    respuesta = contexto.a_dict()
    respuesta['es_lider'] = contexto.es_lider(cliente_id)
    return jsonify(respuesta)


# Clientes que se pueden agregar a un grupo
@grupos_bp.route('/disponibles', methods=['GET'])
def clientes_disponibles():
    busqueda = request.args.get('q', '').strip()
    clientes = servicio.clientes_disponibles(busqueda)
    return jsonify([c.a_dict() for c in clientes])


@grupos_bp.route('/', methods=['POST'])
def nuevo_grupo():
    datos = datos_json()
    lider_id = entero(campo_requerido(datos, 'lider_id'), 'lider_id')
    grupo = servicio.crear_grupo(lider_id, datos.get('nombre', ''))
    return jsonify(grupo.a_dict()), 201


@grupos_bp.route('/<int:grupo_id>/miembros', methods=['POST'])
def agregar_miembro(grupo_id):
    datos = datos_json()
    cliente_id = entero(campo_requerido(datos, 'cliente_id'), 'cliente_id')
    servicio.agregar_miembro(grupo_id, cliente_id)
    return jsonify({'mensaje': 'Miembro agregado al grupo.'}), 201


@grupos_bp.route('/<int:grupo_id>/miembros/<int:cliente_id>', methods=['DELETE'])
def eliminar_miembro(grupo_id, cliente_id):
    servicio.eliminar_miembro(grupo_id, cliente_id)
    return jsonify({'mensaje': 'El miembro ha sido removido del grupo.'})


@grupos_bp.route('/<int:grupo_id>', methods=['DELETE'])
def eliminar_grupo(grupo_id):
    servicio.disolver_grupo(grupo_id)
    return jsonify({'mensaje': 'El grupo ha sido eliminado correctamente.'})
