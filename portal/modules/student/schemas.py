from pydantic import BaseModel, EmailStr
from portal.modules.normalizer.coercion import Grade, OptionalText, Text
from portal.modules.normalizer.schemas import ResultMeta

class StudentInfo(BaseModel):
    numero_control: Text
    persona: str
    email: EmailStr
    semestre: int
    num_mat_rep_no_acreditadas: OptionalText = None
    creditos_acumulados: OptionalText = None
    promedio_ponderado: Grade = None
    promedio_aritmetico: Grade = None
    materias_cursadas: OptionalText = None
    materias_reprobadas: OptionalText = None
    materias_aprobadas: OptionalText = None
    creditos_complementarios: float | None = None
    porcentaje_avance: float | None = None
    num_materias_rep_primera: int | None = None
    num_materias_rep_segunda: int | None = None
    percentaje_avance_cursando: float | None = None
    foto: str | None = None  # base64

class StudentOut(BaseModel):
    data: dict
    meta: ResultMeta
