from dataclasses import dataclass, field
from pathlib import Path

from staffing.coverage import MIN_HEADCOUNT_12X36, ROTATION_12X36_LABEL


@dataclass
class Config:

    ### COVERAGE RULE ###

    # Rotation label that triggers the minimum crew floor
    ROTATION_12X36_LABEL: str = ROTATION_12X36_LABEL
    MIN_HEADCOUNT_12X36: int = MIN_HEADCOUNT_12X36

    # Collaborator status counted as active staff on a post
    ACTIVE_STATUS: str = "ativo"

    ### REPORTING ###

    OUTPUT_DIR: Path = field(default_factory=lambda: Path("outputs"))
    ENABLE_PLOTS: bool = True

    # Number of uncovered posts listed in the text report
    NUM_PRINT_EXAMPLES: int = 6

    def __post_init__(self) -> None:
        self.OUTPUT_DIR = Path(self.OUTPUT_DIR)

    def validate(self):
        """
        Validate the Config object has sensible values before reporting.
        """
        if not self.ROTATION_12X36_LABEL or not self.ROTATION_12X36_LABEL.strip():
            raise ValueError("ROTATION_12X36_LABEL must be a non-empty string.")
        if self.MIN_HEADCOUNT_12X36 < MIN_HEADCOUNT_12X36:
            raise ValueError(
                f"MIN_HEADCOUNT_12X36 must be >= {MIN_HEADCOUNT_12X36}; "
                "a 12x36 rotation cannot be covered with fewer people."
            )
        if not self.ACTIVE_STATUS or not self.ACTIVE_STATUS.strip():
            raise ValueError("ACTIVE_STATUS must be a non-empty string.")
        if self.NUM_PRINT_EXAMPLES < 0:
            raise ValueError("NUM_PRINT_EXAMPLES must be non-negative.")


cfg = Config()
