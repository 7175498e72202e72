"""Tests for expanding per-day schedule columns into individual classes."""

from portal.modules.class_schedule.schemas import RawScheduleItem, SchedulePeriod
from portal.modules.class_schedule.service import build_schedule, expand_item

ITEM = {
    "id_grupo": 7781,
    "letra_grupo": "A",
    "nombre_materia": "Redes de Computadoras",
    "clave_materia": "SCD1021",
    "clave_turno": "M",
    "nombre_plan": "ISIC-2010-224",
    "letra_nivel": "L",
    "lunes": "07:00-09:00",
    "lunes_clave_salon": "I-12",
    "martes": None,
    "miercoles": " 09:00 - 10:00 ",
    "miercoles_clave_salon": None,
    "jueves": "",
    "viernes": "sin horario",
    "sabado": None,
}


def test_expand_item_one_class_per_scheduled_day():
    classes = expand_item(RawScheduleItem.model_validate(ITEM))
    assert [c.dia for c in classes] == ["LUNES", "MIÉRCOLES"]
    monday, wednesday = classes
    assert (monday.hora_inicio, monday.hora_fin, monday.aula) == ("07:00", "09:00", "I-12")
    assert (wednesday.hora_inicio, wednesday.hora_fin, wednesday.aula) == ("09:00", "10:00", None)


def test_build_schedule_uses_first_period():
    periods = [
        SchedulePeriod.model_validate({
            "periodo": {"clave_periodo": "20251", "anio": 2025, "descripcion_periodo": "ENE-JUN 2025"},
            "horario": [ITEM, dict(ITEM, clave_materia="SCC1019", lunes="11:00-12:00")],
        }),
        SchedulePeriod.model_validate({
            "periodo": {"clave_periodo": "20243", "anio": 2024, "descripcion_periodo": "AGO-DIC 2024"},
            "horario": [dict(ITEM, clave_materia="OLD0001")],
        }),
    ]
    classes, metadata = build_schedule(periods)
    assert len(classes) == 4
    assert metadata.total_materias == 2
    assert metadata.periodo["clave_periodo"] == "20251"


def test_build_schedule_empty():
    classes, metadata = build_schedule([])
    assert classes == []
    assert metadata.total_materias == 0
    assert metadata.periodo is None
