"""
Default benchmark questions over the Xeto building-automation corpus
"""

from typing import Any, Dict, List

CATEGORIES = ("direct_lookup", "inheritance", "functional", "complex", "troubleshooting")


def _q(category: str, query_text: str, expected_keywords: List[str], difficulty_level: int) -> Dict[str, Any]:
    return {
        "category": category,
        "query_text": query_text,
        "expected_keywords": expected_keywords,
        "difficulty_level": difficulty_level,
    }


DEFAULT_TEST_QUERIES: List[Dict[str, Any]] = [
    # Direct type lookup
    _q("direct_lookup", "What is Co2Sensor?",
       ["Co2Sensor", "carbon dioxide", "sensor", "abstract"], 1),
    _q("direct_lookup", "Show me ZoneAirTempSensor specification",
       ["ZoneAirTempSensor", "zone", "air", "temperature", "sensor"], 1),
    _q("direct_lookup", "What are the properties of DischargeAirTempSensor?",
       ["DischargeAirTempSensor", "discharge", "air", "temperature"], 2),

    # Inheritance and relationships
    _q("inheritance", "What types inherit from NumberPoint?",
       ["NumberPoint", "inherit", "sensor", "setpoint"], 2),
    _q("inheritance", "Show me all sensor types for air temperature",
       ["sensor", "air", "temperature", "AirTempSensor"], 2),
    _q("inheritance", "What is the difference between Co2Point and Co2Sensor?",
       ["Co2Point", "Co2Sensor", "difference", "abstract"], 3),

    # Functional
    _q("functional", "How do I measure CO2 in a zone?",
       ["CO2", "zone", "measure", "ZoneCo2Sensor"], 2),
    _q("functional", "What sensors are available for discharge air temperature?",
       ["sensor", "discharge", "air", "temperature"], 2),
    _q("functional", "Show me all setpoint types for zone temperature control",
       ["setpoint", "zone", "temperature", "control"], 3),

    # Complex multi-part
    _q("complex",
       "What is the complete hierarchy for zone air temperature control including sensors, setpoints, and commands?",
       ["hierarchy", "zone", "air", "temperature", "sensor", "setpoint", "command"], 4),
    _q("complex", "How do VAV systems connect to air handlers in the xeto model?",
       ["VAV", "air handler", "connect", "relationship"], 4),
    _q("complex", "What are all the measurement points available for an air handling unit?",
       ["measurement", "points", "air handling unit", "AHU"], 3),

    # Troubleshooting
    _q("troubleshooting", "What diagnostic points are available for fan operation?",
       ["diagnostic", "fan", "operation", "points"], 3),
    _q("troubleshooting", "Show me all pressure measurement types for ductwork",
       ["pressure", "measurement", "ductwork", "sensor"], 2),
    _q("troubleshooting", "What temperature sensors can I use to verify economizer operation?",
       ["temperature", "sensor", "economizer", "operation"], 3),
]
