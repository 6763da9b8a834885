"""
Deterministic diagnostic rule engine.

Each rule reads one or two answers and compares them with Yes or No. Not
testable and unanswered never trigger anything. Rules are evaluated in a
fixed order grouped by subsystem, and every matching rule contributes its
statement exactly once.
"""

from typing import Dict, List, Tuple

from src.schemas.models import AnswerState, InspectionQuestion, InspectionRecord
from utils.logger import setup_logger
from utils.config import config

logger = setup_logger(__name__, level=config.log_level, component="RULES")


# ============================================================================
# SUBSYSTEMS - in evaluation order
# ============================================================================
SUBSYSTEM_SCREEN = "screen"
SUBSYSTEM_PHYSICAL = "physical"
SUBSYSTEM_CAMERA = "camera"
SUBSYSTEM_AUDIO = "audio"
SUBSYSTEM_POWER = "power"
SUBSYSTEM_MOISTURE = "moisture"

SUBSYSTEM_ORDER = [
    SUBSYSTEM_SCREEN,
    SUBSYSTEM_PHYSICAL,
    SUBSYSTEM_CAMERA,
    SUBSYSTEM_AUDIO,
    SUBSYSTEM_POWER,
    SUBSYSTEM_MOISTURE,
]

NO_DEFECT_STATEMENT = "Nenhum defeito significativo detectado na inspeção visual"


class DiagnosticRule:
    """A predicate over the answers and the statement it emits."""

    def __init__(
        self,
        rule_id: str,
        subsystem: str,
        triggers: Tuple[Tuple[InspectionQuestion, AnswerState], ...],
        statement: str,
    ):
        self.rule_id = rule_id
        self.subsystem = subsystem
        self.triggers = triggers
        self.statement = statement

    @property
    def questions(self) -> List[InspectionQuestion]:
        return [question for question, _ in self.triggers]

    def matches(self, record: InspectionRecord) -> bool:
        """Any trigger holding fires the rule (OR semantics)."""
        return any(record.answer(question) == expected for question, expected in self.triggers)

    def __repr__(self) -> str:
        return f"DiagnosticRule({self.rule_id!r}, subsystem={self.subsystem!r})"


Q = InspectionQuestion
YES = AnswerState.YES
NO = AnswerState.NO

DIAGNOSTIC_RULES: List[DiagnosticRule] = [
    DiagnosticRule(
        "screen_damage", SUBSYSTEM_SCREEN,
        ((Q.SCREEN_CRACKED, YES), (Q.SCREEN_SCRATCHED, YES)),
        "Problema na tela: Possível necessidade de troca do display",
    ),
    DiagnosticRule(
        "touch_fault", SUBSYSTEM_SCREEN,
        ((Q.TOUCH_WORKS, NO),),
        "Touch não funciona: Problema no digitalizador ou cabo flex",
    ),
    DiagnosticRule(
        "panel_fault", SUBSYSTEM_SCREEN,
        ((Q.SCREEN_WORKS, NO),),
        "Tela não acende: Possível problema no LCD/OLED ou placa mãe",
    ),
    DiagnosticRule(
        "back_broken", SUBSYSTEM_PHYSICAL,
        ((Q.BACK_BROKEN, YES),),
        "Traseira quebrada: Necessidade de troca da tampa traseira",
    ),
    DiagnosticRule(
        "button_fault", SUBSYSTEM_PHYSICAL,
        ((Q.BUTTONS_WORK, NO),),
        "Botões não funcionam: Problema nos botões físicos ou cabo flex",
    ),
    DiagnosticRule(
        "camera_damage", SUBSYSTEM_CAMERA,
        ((Q.CAMERA_LENS_DAMAGED, YES), (Q.CAMERA_DAMAGED, YES)),
        "Câmera danificada: Possível troca do módulo da câmera",
    ),
    DiagnosticRule(
        "camera_exposed", SUBSYSTEM_CAMERA,
        ((Q.CAMERA_EXPOSED, YES),),
        "Câmera exposta: Risco de danos internos, verificar proteção",
    ),
    DiagnosticRule(
        "no_sound", SUBSYSTEM_AUDIO,
        ((Q.HAS_SOUND, NO),),
        "Sem som: Problema no alto-falante ou circuito de áudio",
    ),
    DiagnosticRule(
        "audio_output_damaged", SUBSYSTEM_AUDIO,
        ((Q.AUDIO_OUTPUT_DAMAGED, YES),),
        "Saída de áudio danificada: Necessária limpeza ou reparo",
    ),
    DiagnosticRule(
        "no_power", SUBSYSTEM_POWER,
        ((Q.DEVICE_TURNS_ON, NO),),
        "Aparelho não liga: Problema na bateria, carregador ou placa mãe",
    ),
    DiagnosticRule(
        "no_charge", SUBSYSTEM_POWER,
        ((Q.DEVICE_CHARGES, NO),),
        "Não carrega: Problema no conector de carga ou circuito de carregamento",
    ),
    DiagnosticRule(
        "moisture", SUBSYSTEM_MOISTURE,
        ((Q.MOISTURE_SIGNS, YES),),
        "Sinais de umidade: Risco de oxidação, limpeza completa necessária",
    ),
]


def matching_rules(record: InspectionRecord) -> List[DiagnosticRule]:
    """Rules that fire for a record, in priority order."""
    return [rule for rule in DIAGNOSTIC_RULES if rule.matches(record)]


def infer(record: InspectionRecord) -> List[str]:
    """
    Map an inspection record to ordered diagnostic statements.

    Args:
        record: Snapshot of the checklist

    Returns:
        Statements of every rule that fired, or the single no-defect
        statement when none did
    """
    fired = matching_rules(record)

    if not fired:
        logger.debug("No diagnostic rule fired")
        return [NO_DEFECT_STATEMENT]

    logger.debug(f"Rules fired: {', '.join(rule.rule_id for rule in fired)}")
    return [rule.statement for rule in fired]


def is_no_defect(diagnostics: List[str]) -> bool:
    """Whether diagnostics are just the no-defect sentinel."""
    return list(diagnostics) == [NO_DEFECT_STATEMENT]


def group_by_subsystem(record: InspectionRecord) -> Dict[str, List[str]]:
    """Fired statements keyed by subsystem, subsystems in evaluation order."""
    grouped: Dict[str, List[str]] = {}
    for rule in matching_rules(record):
        grouped.setdefault(rule.subsystem, []).append(rule.statement)
    return {subsystem: grouped[subsystem] for subsystem in SUBSYSTEM_ORDER if subsystem in grouped}
