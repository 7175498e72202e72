import logging
from dataclasses import replace
from portal.core.config import settings
from portal.core.security import StudentSession
from portal.core.upstream import UpstreamClient
from portal.modules.grades.schemas import PeriodWithSubjects, ProcessedGrade
from portal.modules.normalizer.candidates import Candidate, SELF
from portal.modules.normalizer.gateway import fetch_normalized
from portal.modules.normalizer.messages import DEFAULT_MESSAGES
from portal.modules.normalizer.results import NormalizedResponse

logger = logging.getLogger(__name__)

PARTIALS = (1, 2, 3, 4)

GRADES_CANDIDATES = (
    Candidate.at("data"),
    Candidate.at("message.calificaciones"),
    Candidate.at("message.grades"),
    Candidate.at("calificaciones"),
    SELF,
)

GRADES_MESSAGES = DEFAULT_MESSAGES.override(
    not_found="No se encontraron calificaciones.",
    request_failed="Error {code}: No se pudieron obtener las calificaciones.",
    no_payload="No se recibieron calificaciones válidas",
)

def average(grades: list[str | None]) -> str | None:
    values = [float(g) for g in grades if g is not None]
    if not values:
        return None
    return f"{sum(values) / len(values):.2f}"

def flatten(periods: list[PeriodWithSubjects]) -> list[ProcessedGrade]:
    rows: list[ProcessedGrade] = []
    for period in periods:
        info = period.periodo
        for subject in period.materias or []:
            materia = subject.materia
            by_number = {p.numero_calificacion: p.calificacion for p in (subject.parciales or []) if p is not None}
            partials = [by_number.get(n) for n in PARTIALS]
            rows.append(ProcessedGrade(
                nombre_materia=materia.nombre_materia if materia else None,
                clave_materia=materia.clave_materia if materia else None,
                grupo=materia.letra_grupo if materia else None,
                id_grupo=materia.id_grupo if materia else None,
                periodo=info.clave_periodo if info else None,
                periodo_descripcion=info.descripcion_periodo if info else None,
                anio=info.anio if info else None,
                parcial1=partials[0],
                parcial2=partials[1],
                parcial3=partials[2],
                parcial4=partials[3],
                promedio=average(partials),
            ))
    return rows

class GradesService:
    def __init__(self, upstream: UpstreamClient):
        self.upstream = upstream

    async def get_grades(self, session: StudentSession) -> NormalizedResponse:
        result = await fetch_normalized(
            self.upstream, settings.UPSTREAM_GRADES_PATH, session,
            GRADES_CANDIDATES, PeriodWithSubjects, many=True, messages=GRADES_MESSAGES,
        )
        if not result.ok:
            return result
        rows = flatten(result.value)
        logger.info(f"{len(rows)} subjects across {len(result.value)} periods")
        return replace(result, value=rows)
