from aiogram.fsm.state import State, StatesGroup


class LeadForm(StatesGroup):
    """States for the waiting-list form card."""

    # Waiting for the text of the field stored as "field" in the FSM data
    text_input = State()
