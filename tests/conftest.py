import pytest
import yaml

from autoredshift.controller import TEST_CONFIG_YAML
from autoredshift.evaluation.time import Waketime
from autoredshift.settings.user import AppConfig


@pytest.fixture
def config() -> AppConfig:
    return AppConfig.model_validate(yaml.safe_load(TEST_CONFIG_YAML))


@pytest.fixture
def waketime() -> Waketime:
    return Waketime(hours=6, minutes=0)
