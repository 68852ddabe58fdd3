from dataclasses import dataclass, field
from typing import List
from flask import current_app
from sqlalchemy import select
from errors import ValidationError, ConflictError, NotFoundError
from models import db, Grupo, Cliente
from utils import unidad_de_trabajo, normalizar_texto


@dataclass
class ContextoGrupo:
    """Grupo de un cliente junto con su lista actual de miembros."""
    grupo: Grupo
    miembros: List[Cliente] = field(default_factory=list)

    @property
    def ids_miembros(self):
        return [m.id for m in self.miembros]

    def es_lider(self, cliente_id):
        return self.grupo.lider_id == cliente_id

    def a_dict(self):
        return {
            'grupo': self.grupo.a_dict(),
            'miembros': [m.a_dict() for m in self.miembros],
        }


def obtener_cliente(cliente_id):
    cliente = db.session.get(Cliente, cliente_id)
    if cliente is None:
        raise NotFoundError(f'Cliente {cliente_id} no encontrado.')
    return cliente


def obtener_grupo(grupo_id):
    grupo = db.session.get(Grupo, grupo_id)
    if grupo is None:
        raise NotFoundError(f'Grupo {grupo_id} no encontrado.')
    return grupo


def _miembros(grupo):
    return list(grupo.clientes)


def resolver_grupo(cliente_id):
    cliente = obtener_cliente(cliente_id)

    # Primero: ¿es líder de algún grupo?
    grupo = Grupo.query.filter_by(lider_id=cliente.id).first()
    if grupo is None and cliente.grupo_id is not None:
        # Si no, ¿es miembro del grupo de otro cliente?
        grupo = db.session.get(Grupo, cliente.grupo_id)

    if grupo is None:
        return None
    return ContextoGrupo(grupo=grupo, miembros=_miembros(grupo))


def crear_grupo(lider_id, nombre):
    nombre = (nombre or '').strip()
    if not nombre:
        raise ValidationError('Ingresa un nombre para el grupo.')

    lider = obtener_cliente(lider_id)
    if lider.grupo_id is not None or Grupo.query.filter_by(lider_id=lider.id).first():
        raise ConflictError(f'{lider.nombre} ya pertenece a un grupo.')

    with unidad_de_trabajo('la creación del grupo'):
        grupo = Grupo(nombre=nombre, lider_id=lider.id)
        db.session.add(grupo)
        db.session.flush()
        lider.grupo_id = grupo.id

    current_app.logger.info(f'Grupo "{grupo.nombre}" ({grupo.id}) creado con líder {lider.id}.')
    return grupo


def agregar_miembro(grupo_id, cliente_id):
    grupo = obtener_grupo(grupo_id)
    cliente = obtener_cliente(cliente_id)

    if cliente.grupo_id is not None:
        raise ValidationError(f'{cliente.nombre} ya pertenece a un grupo.')
    if Grupo.query.filter_by(lider_id=cliente.id).first():
        raise ValidationError(f'{cliente.nombre} ya lidera otro grupo.')

    with unidad_de_trabajo('la incorporación del miembro'):
        cliente.grupo_id = grupo.id

    current_app.logger.info(f'Cliente {cliente.id} agregado al grupo {grupo.id}.')


def eliminar_miembro(grupo_id, cliente_id):
    grupo = obtener_grupo(grupo_id)
    if cliente_id == grupo.lider_id:
        raise ValidationError('No puedes eliminar al líder del grupo (cannot remove leader).')

    cliente = obtener_cliente(cliente_id)
    if cliente.grupo_id != grupo.id:
        raise ValidationError(f'{cliente.nombre} no pertenece a este grupo.')

    with unidad_de_trabajo('la eliminación del miembro'):
        cliente.grupo_id = None

    current_app.logger.info(f'Cliente {cliente.id} removido del grupo {grupo.id}.')


def disolver_grupo(grupo_id):
    grupo = obtener_grupo(grupo_id)

    # Desasignar miembros y borrar el grupo en la misma transacción:
    # ningún cliente queda apuntando a un grupo eliminado
    with unidad_de_trabajo('la eliminación del grupo'):
        miembros = list(grupo.clientes)
        for cliente in miembros:
            cliente.grupo_id = None
        db.session.flush()
        db.session.delete(grupo)

    current_app.logger.info(f'Grupo {grupo_id} disuelto ({len(miembros)} miembros liberados).')


def clientes_disponibles(busqueda=''):
    """Clientes sin grupo (ni liderando uno) cuyo nombre coincide con la búsqueda."""
    lideres = select(Grupo.lider_id)
    candidatos = Cliente.query.filter(
        Cliente.grupo_id.is_(None),
        ~Cliente.id.in_(lideres),
    ).all()
    candidatos.sort(key=lambda c: normalizar_texto(c.nombre))

    filtro = normalizar_texto(busqueda)
    if not filtro:
        return candidatos
    return [c for c in candidatos if filtro in normalizar_texto(c.nombre)]


def participantes_renovacion(pagador_id, seleccionados, modo_grupal):
    obtener_cliente(pagador_id)
    if not modo_grupal:
        return [pagador_id]

    contexto = resolver_grupo(pagador_id)
    if contexto is None or not contexto.es_lider(pagador_id):
        raise ValidationError('Solo el líder de un grupo puede hacer una renovación grupal.')

    ids = list(dict.fromkeys(seleccionados or []))
    if not ids:
        raise ValidationError('Selecciona al menos un miembro del grupo.')

    ajenos = [i for i in ids if i not in contexto.ids_miembros]
    if ajenos:
        raise ValidationError(f'Los clientes {ajenos} no pertenecen al grupo {contexto.grupo.nombre}.')
    return ids
