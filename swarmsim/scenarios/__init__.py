"""
Simulation Scenarios
====================

Scenario records, loading, seeded agent generation and pre-configured
scenarios.
"""

from .loader import (
    AgentRecord,
    Scenario,
    record_to_agent,
    scenario_to_agents,
    scenario_from_dict,
    load_scenario,
)
from .generators import generate_test_agents
from .ring_formation import RingFormationScenario, RingFormationScenarioConfig
from .task_demo import TaskDemoScenario, TaskDemoScenarioConfig

__all__ = [
    'AgentRecord',
    'Scenario',
    'record_to_agent',
    'scenario_to_agents',
    'scenario_from_dict',
    'load_scenario',
    'generate_test_agents',
    'RingFormationScenario',
    'RingFormationScenarioConfig',
    'TaskDemoScenario',
    'TaskDemoScenarioConfig',
]
