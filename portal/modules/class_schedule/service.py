import logging
from dataclasses import replace
from portal.core.config import settings
from portal.core.security import StudentSession
from portal.core.upstream import UpstreamClient
from portal.modules.class_schedule.schemas import RawScheduleItem, ScheduleClass, ScheduleMetadata, SchedulePeriod
from portal.modules.normalizer.candidates import Candidate, SELF
from portal.modules.normalizer.gateway import fetch_normalized
from portal.modules.normalizer.messages import DEFAULT_MESSAGES
from portal.modules.normalizer.results import NormalizedResponse
from portal.modules.normalizer.validation import dump

logger = logging.getLogger(__name__)

DAYS = {
    "lunes": "LUNES",
    "martes": "MARTES",
    "miercoles": "MIÉRCOLES",
    "jueves": "JUEVES",
    "viernes": "VIERNES",
    "sabado": "SÁBADO",
}

SCHEDULE_CANDIDATES = (
    Candidate.at("data"),
    Candidate.at("message.horario"),
    SELF,
)

SCHEDULE_MESSAGES = DEFAULT_MESSAGES.override(
    not_found="No se encontró el horario del estudiante.",
    request_failed="Error {code}: No se pudo obtener el horario.",
    no_payload="Error al validar estructura del horario del API",
)

def expand_item(item: RawScheduleItem) -> list[ScheduleClass]:
    classes = []
    for key, label in DAYS.items():
        span = getattr(item, key, None)
        if not span or not span.strip():
            continue
        start, sep, end = span.partition("-")
        if not sep:
            logger.warning(f"Unreadable time span {span!r} for {item.clave_materia} on {label}")
            continue
        classes.append(ScheduleClass(
            id_grupo=item.id_grupo,
            clave_materia=item.clave_materia,
            nombre_materia=item.nombre_materia,
            letra_grupo=item.letra_grupo,
            dia=label,
            hora_inicio=start.strip(),
            hora_fin=end.strip(),
            aula=getattr(item, f"{key}_clave_salon", None) or None,
            nombre_plan=item.nombre_plan,
            clave_turno=item.clave_turno,
            letra_nivel=item.letra_nivel,
        ))
    return classes

def build_schedule(periods: list[SchedulePeriod]) -> tuple[list[ScheduleClass], ScheduleMetadata]:
    if not periods:
        return [], ScheduleMetadata(total_materias=0)
    # upstream only ever sends the current period first
    current = periods[0]
    classes: list[ScheduleClass] = []
    for item in current.horario or []:
        classes.extend(expand_item(item))
    subjects = {c.clave_materia for c in classes}
    periodo = dump(current.periodo) if current.periodo is not None else None
    return classes, ScheduleMetadata(periodo=periodo, total_materias=len(subjects))

class ClassScheduleService:
    def __init__(self, upstream: UpstreamClient):
        self.upstream = upstream

    async def get_schedule(self, session: StudentSession) -> tuple[NormalizedResponse, ScheduleMetadata | None]:
        result = await fetch_normalized(
            self.upstream, settings.UPSTREAM_SCHEDULE_PATH, session,
            SCHEDULE_CANDIDATES, SchedulePeriod, many=True, messages=SCHEDULE_MESSAGES,
        )
        if not result.ok:
            return result, None
        classes, metadata = build_schedule(result.value)
        logger.info(f"{len(classes)} class sessions for {metadata.total_materias} subjects")
        return replace(result, value=classes), metadata
