"""Constants for the bus roster."""

BUSES_ENDPOINT = "/api/buses"

BUS_TYPE_EXPRESS = "Express"
BUS_TYPE_DELUXE = "Deluxe"
BUS_TYPE_SLEEPER = "Sleeper"
BUS_TYPES = (BUS_TYPE_EXPRESS, BUS_TYPE_DELUXE, BUS_TYPE_SLEEPER)

DEFAULT_BUS_TYPE = BUS_TYPE_EXPRESS
DEFAULT_CAPACITY = 40

FETCH_FAILED_MESSAGE = "Failed to fetch buses. Please try again later."
CREATE_FAILED_MESSAGE = "Failed to add bus. Please try again."
UPDATE_FAILED_MESSAGE = "Failed to update bus. Please try again."
DELETE_FAILED_MESSAGE = "Failed to delete bus. Please try again."

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
    "User-Agent": "busroster",
}
