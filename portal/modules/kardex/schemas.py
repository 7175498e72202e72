from pydantic import BaseModel
from portal.modules.normalizer.coercion import KardexGrade, LenientInt, Text
from portal.modules.normalizer.schemas import ResultMeta

class KardexSubject(BaseModel):
    clave_materia: Text
    nombre_materia: str
    creditos: LenientInt
    # numeric grade as "NN.NN", or a literal mark such as "AC" (acreditada)
    calificacion: KardexGrade = None
    periodo: Text
    semestre: int | str
    descripcion: str  # NORMAL / ORDINARIO, REPETICIÓN, ...

class KardexResponse(BaseModel):
    porcentaje_avance: float
    kardex: list[KardexSubject]

class KardexOut(BaseModel):
    data: list[dict]
    porcentaje_avance: float | None = None
    meta: ResultMeta
