"""
tests/test_applicability.py
Unit tests for src/trigger/applicability.py.
"""

from collections import OrderedDict

from src.project.base import AbstractProject


class Freestyle(AbstractProject):
    def schedule_build_with_actions(self, quiet_period, actions):
        return None


def test_simple_project_is_applicable():
    from src.trigger.applicability import ApplicabilityFilter

    assert ApplicabilityFilter().is_applicable(Freestyle("demo")) is True


def test_unknown_kind_is_not_applicable_without_pipeline_variant():
    from src.trigger.applicability import ApplicabilityFilter

    assert ApplicabilityFilter().is_applicable(object()) is False


def test_registered_pipeline_variant_is_applicable():
    from src.trigger.applicability import ApplicabilityFilter

    class WorkflowJob:
        pass

    applicability = ApplicabilityFilter(pipeline_types=(WorkflowJob,))
    assert applicability.is_applicable(WorkflowJob()) is True
    assert applicability.is_applicable(object()) is False


def test_load_optional_variant_resolves_installed_class():
    from src.trigger.applicability import load_optional_variant

    assert load_optional_variant("collections:OrderedDict") is OrderedDict


def test_load_optional_variant_tolerates_missing_module_or_class():
    from src.trigger.applicability import load_optional_variant

    assert load_optional_variant("") is None
    assert load_optional_variant("workflow_job_plugin_not_installed:WorkflowJob") is None
    assert load_optional_variant("collections:NoSuchJob") is None
    assert load_optional_variant("collections:namedtuple") is None
    assert load_optional_variant("no-colon") is None


def test_from_config_reads_pipeline_variant(monkeypatch):
    from src.trigger.applicability import ApplicabilityFilter

    monkeypatch.setenv("GITBUCKET_PIPELINE_VARIANT", "collections:OrderedDict")
    assert ApplicabilityFilter.from_config().is_applicable(OrderedDict()) is True


def test_from_config_with_absent_variant_module(monkeypatch):
    from src.trigger.applicability import ApplicabilityFilter

    monkeypatch.setenv("GITBUCKET_PIPELINE_VARIANT", "workflow_job_plugin_not_installed:WorkflowJob")
    applicability = ApplicabilityFilter.from_config()
    assert applicability.is_applicable(OrderedDict()) is False
    assert applicability.is_applicable(Freestyle("demo")) is True
