class UIKeys:
    """Keys for UI widgets in ``st.session_state``."""

    LANG_SELECT = "ui.lang_select"


class StateKeys:
    """Keys for data stored in ``st.session_state``."""

    LANG = "lang"
    SESSION_ID = "session_id"
    IDV_RESULT = "idv.result"
