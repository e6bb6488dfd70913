from meeting_finder.finder import SlotFinderController

_controller: SlotFinderController | None = None

def get_controller() -> SlotFinderController:
    global _controller
    if _controller is None:
        _controller = SlotFinderController()
    return _controller
