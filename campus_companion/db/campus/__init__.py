from campus_companion.db.campus.model import Club, Event, Resource
from campus_companion.db.campus.repository import CampusRepository

__all__ = ["CampusRepository", "Club", "Event", "Resource"]
