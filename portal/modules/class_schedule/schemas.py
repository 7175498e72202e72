from pydantic import BaseModel
from portal.modules.normalizer.coercion import OptionalText, Text
from portal.modules.normalizer.schemas import ResultMeta

class Period(BaseModel):
    clave_periodo: Text
    anio: int
    descripcion_periodo: str

class RawScheduleItem(BaseModel):
    """One subject as upstream sends it: a column per weekday ("07:00-09:00") plus its room."""
    id_grupo: int
    letra_grupo: Text
    nombre_materia: str
    clave_materia: Text
    clave_turno: Text
    nombre_plan: str
    letra_nivel: Text

    lunes: str | None = None
    lunes_clave_salon: OptionalText = None
    martes: str | None = None
    martes_clave_salon: OptionalText = None
    miercoles: str | None = None
    miercoles_clave_salon: OptionalText = None
    jueves: str | None = None
    jueves_clave_salon: OptionalText = None
    viernes: str | None = None
    viernes_clave_salon: OptionalText = None
    sabado: str | None = None
    sabado_clave_salon: OptionalText = None

class SchedulePeriod(BaseModel):
    periodo: Period
    horario: list[RawScheduleItem]

class ScheduleClass(BaseModel):
    id_grupo: int | None = None
    clave_materia: str | None = None
    nombre_materia: str | None = None
    letra_grupo: str | None = None
    dia: str                 # "LUNES", "MARTES", ...
    hora_inicio: str         # "07:00"
    hora_fin: str            # "09:00"
    aula: str | None = None
    nombre_plan: str | None = None
    clave_turno: str | None = None
    letra_nivel: str | None = None

class ScheduleMetadata(BaseModel):
    periodo: dict | None = None
    total_materias: int = 0

class ScheduleOut(BaseModel):
    data: list[ScheduleClass]
    metadata: ScheduleMetadata
    meta: ResultMeta
