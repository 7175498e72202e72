from pydantic import BaseModel, Field
from portal.modules.normalizer.coercion import Grade, LenientInt, Text
from portal.modules.normalizer.schemas import ResultMeta

class PartialGrade(BaseModel):
    numero_calificacion: LenientInt
    calificacion: Grade = None

class SubjectInfo(BaseModel):
    nombre_materia: str
    clave_materia: Text
    letra_grupo: Text
    id_grupo: int

class SubjectWithGrades(BaseModel):
    materia: SubjectInfo
    # upstream spells it "calificaiones"
    parciales: list[PartialGrade] = Field(alias="calificaiones")

class PeriodInfo(BaseModel):
    clave_periodo: Text
    anio: int
    descripcion_periodo: str

class PeriodWithSubjects(BaseModel):
    periodo: PeriodInfo
    materias: list[SubjectWithGrades]

class ProcessedGrade(BaseModel):
    """One subject per row, flattened for the grades table."""
    nombre_materia: str | None = None
    clave_materia: str | None = None
    grupo: str | None = None
    id_grupo: int | None = None
    periodo: str | None = None
    periodo_descripcion: str | None = None
    anio: int | None = None
    parcial1: str | None = None
    parcial2: str | None = None
    parcial3: str | None = None
    parcial4: str | None = None
    promedio: str | None = None

class GradesOut(BaseModel):
    data: list[ProcessedGrade]
    meta: ResultMeta
