class GimnasioError(Exception):
    """Error base de las operaciones de renovación y pagos."""
    status_code = 500

    def __init__(self, mensaje):
        super().__init__(mensaje)
        self.mensaje = mensaje


class ValidationError(GimnasioError):
    # Datos de entrada que el usuario puede corregir
    status_code = 400


class NotFoundError(ValidationError):
    status_code = 404


class ConflictError(GimnasioError):
    # Violación de un invariante (ej. doble pertenencia a un grupo)
    status_code = 409


class StoreError(GimnasioError):
    # La base de datos no respondió o rechazó la operación
    status_code = 503
