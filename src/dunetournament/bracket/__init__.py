from dunetournament.bracket.engine import (
    bracket_rounds,
    generate_elimination_round,
    generate_grand_final,
    generate_redemption_round,
    generate_semifinals,
    generate_stage,
)
from dunetournament.bracket.template import (
    TOP_8_TEMPLATE,
    TOP_16_TEMPLATE,
    Advancement,
    BracketTemplate,
    SeedTable,
    Stage,
    StageTable,
    get_template,
)

__all__ = [
    "Advancement",
    "BracketTemplate",
    "SeedTable",
    "Stage",
    "StageTable",
    "TOP_8_TEMPLATE",
    "TOP_16_TEMPLATE",
    "bracket_rounds",
    "generate_elimination_round",
    "generate_grand_final",
    "generate_redemption_round",
    "generate_semifinals",
    "generate_stage",
    "get_template",
]
