import logging
from sqlalchemy.ext.asyncio import AsyncSession
from portal.modules.patients.repository import PatientRepository
from portal.modules.patients.models import Patient
from portal.modules.student.schemas import StudentInfo

logger = logging.getLogger(__name__)

def split_persona(persona: str) -> tuple[str, str]:
    """Upstream sends the full name in one field; the first word is the first name."""
    parts = persona.split()
    if not parts:
        return "", ""
    first = parts[0]
    last = " ".join(parts[1:])
    return first, last or first

class PatientService:
    def __init__(self, session: AsyncSession):
        self.repo = PatientRepository(session)
        self.session = session

    async def get_by_control(self, nu_control: str) -> Patient | None:
        return await self.repo.get_by_control(nu_control)

    async def upsert_from_student(self, student: StudentInfo, staff_id: int | None = None) -> Patient:
        """Create or refresh the patient row from the institutional profile (caller commits)."""
        first, last = split_persona(student.persona or "")
        existing = await self.repo.get_by_control(student.numero_control)
        if existing is None:
            logger.info(f"Registering patient {student.numero_control}")
            return await self.repo.create(
                first_name=first,
                last_name=last,
                email=student.email,
                nu_control=student.numero_control,
                assigned_psychologist=staff_id,
            )
        return await self.repo.update(existing, first_name=first, last_name=last, email=student.email)
