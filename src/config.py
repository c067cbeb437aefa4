import os
from pathlib import Path

from src.shared import build_max_workers, build_root_dir, pass_through_default


class Config:
    DEFAULT_PIPELINE_VARIANT = ""

    @staticmethod
    def get_max_workers() -> int:
        return build_max_workers()

    @staticmethod
    def get_root_dir() -> Path:
        return build_root_dir()

    @staticmethod
    def get_pipeline_variant() -> str:
        return os.getenv("GITBUCKET_PIPELINE_VARIANT", Config.DEFAULT_PIPELINE_VARIANT).strip()

    @staticmethod
    def pass_through_git_commit() -> bool:
        return pass_through_default()
