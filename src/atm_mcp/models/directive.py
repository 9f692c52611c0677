"""
Directive model describing what the UI adapter should display.
"""

from typing import List, Optional

from pydantic import BaseModel

from atm_mcp.models.screen import Action, LoginStep, ScreenState


class Directive(BaseModel):
    """
    Rendering instruction emitted by the ATM session after every event.

    The adapter shows ``prompt_text``, enables the buttons listed in
    ``available_actions`` and obscures typed characters when ``mask_input``
    is set.
    """

    model_config = {"strict": True, "populate_by_name": True}

    screen_state: ScreenState
    prompt_text: str
    available_actions: List[Action]
    mask_input: bool = False

    # Only set while on the LOGIN screen
    login_step: Optional[LoginStep] = None

    auto_return_pending: bool = False
