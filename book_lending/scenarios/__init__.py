"""Scenarios for generating realistic lending activity."""

from book_lending.scenarios.lending_activity import LendingActivityScenario, ScenarioResult

__all__ = ["LendingActivityScenario", "ScenarioResult"]
