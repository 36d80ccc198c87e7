from skillshelf.core.linter import Linter
from skillshelf.core.skill_loader import SkillLoader
from skillshelf.utils.config import Config


class SharedContext:
    """Global shared state for the application."""

    config: Config
    skill_loader: SkillLoader
    linter: Linter

    def __init__(self, config: Config):
        self.config = config
        self.skill_loader = SkillLoader.from_config(config)
        self.linter = Linter.from_config(config)
