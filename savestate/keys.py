"""Reserved entry names used by the controller and the host.

These are ordinary entries; the store gives them no special treatment.
"""

SAVE_FILE_VERSION = "SaveFileVersion"
SAVE_TIMESTAMP = "SaveTimestamp"
LAST_ROOM_VISITED = "LastRoomVisited"
LAST_DOOR_VISITED = "LastDoorVisited"
COMPLETED_GAME = "CompletedGame"
