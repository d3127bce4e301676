from models.sessionize import GridDay, RoomSlot, TimeSlot

# Service sessions (registration, lunch, afterparty) are entered against
# whichever room was convenient in Sessionize, but always happen here.
SERVICE_SESSION_ROOM = "Level 3"


def _patch_room_slot(room_slot: RoomSlot) -> RoomSlot:
    if room_slot.session.is_service_session:
        session = room_slot.session.model_copy(update={"room": SERVICE_SESSION_ROOM})
        return room_slot.model_copy(update={"session": session})
    return room_slot


def _patch_time_slot(time_slot: TimeSlot) -> TimeSlot:
    return time_slot.model_copy(update={"rooms": [_patch_room_slot(r) for r in time_slot.rooms]})


def normalize(grid: list[GridDay]) -> list[GridDay]:
    """Move every service session into the service session room.

    Returns a new grid; the one passed in is left alone. Order is kept as
    Sessionize sent it.
    """
    return [day.model_copy(update={"time_slots": [_patch_time_slot(t) for t in day.time_slots]}) for day in grid]
