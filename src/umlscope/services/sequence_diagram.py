"""
Sequence Diagram Emitter.

Serializes one Scenario into PlantUML sequence diagram text:

    @startuml
    title Sequence Diagram for com.app.A::a
    com.app.A -> com.app.B : a calls b
    @enduml
"""

from ..constants import PLANTUML_END, PLANTUML_START, SEQUENCE_TITLE_TEMPLATE
from ..models.scenario import Scenario


class SequenceDiagramEmitter:
    """Renders scenarios; interactions keep their traversal order."""

    def render(self, scenario: Scenario) -> str:
        lines = [
            PLANTUML_START,
            SEQUENCE_TITLE_TEMPLATE.format(
                entity=scenario.entry_entity, method=scenario.entry_method
            ),
        ]
        for interaction in scenario.interactions:
            lines.append(
                f"{interaction.caller_entity} -> {interaction.callee_entity} : "
                f"{interaction.caller_method} calls {interaction.callee_method}"
            )
        lines.append(PLANTUML_END)
        return "\n".join(lines) + "\n"

    def file_stem(self, scenario: Scenario) -> str:
        """File name stem for a scenario's diagram (``<entry>_<method>``)."""
        return f"{scenario.entry_entity}_{scenario.entry_method}"
