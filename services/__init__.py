from services.grupos import (
    ContextoGrupo, resolver_grupo, crear_grupo, agregar_miembro, eliminar_miembro,
    disolver_grupo, clientes_disponibles, participantes_renovacion,
)
from services.precios import DesglosePrecio, PlanCuotas, calcular_precio, cronograma_cuotas
from services.pagos import (
    iniciar_renovacion, registrar_cuota, listar_transacciones, listar_pagos, resumen_pagos,
)
from services.reportes import ingresos_mensuales, exportar_pagos_excel
