from typing import Optional

from irrigsim.core.config import SimulationConfig
from irrigsim.core.state import DecisionReason, ValveDecision, ValveState


class ValveController:
    """
    Hysteresis (deadband) controller for the irrigation valve.

    The valve opens when moisture drops strictly below the low threshold and
    closes when it rises strictly above the high threshold. Inside the band,
    thresholds included, the previous state is held. Holds no state of its
    own; the previous valve state is always passed in.
    """

    def __init__(self, config: SimulationConfig):
        self.config = config

    def evaluate(
        self,
        moisture: float,
        prev_state: Optional[ValveState],
        temperature: Optional[float] = None,
    ) -> ValveDecision:
        """
        Decide the valve state for the current step.

        Args:
            moisture: Current soil moisture in %
            prev_state: Valve state of the previous step, None at the seed step
            temperature: Current temperature, only read by the high-temperature override

        Returns:
            The new valve state and the rule that produced it
        """
        decision = self._moisture_rule(moisture, prev_state)
        return self._temperature_override(decision, temperature)

    def decide(
        self,
        moisture: float,
        prev_state: Optional[ValveState],
        temperature: Optional[float] = None,
    ) -> ValveState:
        return self.evaluate(moisture, prev_state, temperature).state

    def _moisture_rule(
        self, moisture: float, prev_state: Optional[ValveState]
    ) -> ValveDecision:
        if moisture < self.config.moisture_low_threshold:
            return ValveDecision(ValveState.ON, DecisionReason.MOISTURE_LOW)
        if moisture > self.config.moisture_high_threshold:
            return ValveDecision(ValveState.OFF, DecisionReason.MOISTURE_HIGH)
        if prev_state is None:
            return ValveDecision(ValveState.OFF, DecisionReason.INITIAL)
        return ValveDecision(prev_state, DecisionReason.IN_RANGE)

    def _temperature_override(
        self, decision: ValveDecision, temperature: Optional[float]
    ) -> ValveDecision:
        if not self.config.temp_override_enabled or temperature is None:
            return decision
        if decision.state == ValveState.ON and temperature > self.config.temp_high_threshold:
            return ValveDecision(ValveState.OFF, DecisionReason.HIGH_TEMPERATURE)
        return decision
