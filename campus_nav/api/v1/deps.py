# campus_nav/api/v1/deps.py
"""
Shared engine instances for the HTTP routers.

The campus graph is loaded once at import time and is read-only from then
on; planner and resolver only read it.
"""
from campus_nav.core.config import settings
from campus_nav.services.campus_loader import load_campus_graph
from campus_nav.services.location_resolver import LocationResolver
from campus_nav.services.path_planner import PathPlanner
from campus_nav.services.session_store import SessionStore

campus_graph, announced_closures = load_campus_graph(settings.CAMPUS_DATA_FILE)
location_resolver = LocationResolver(campus_graph)
path_planner = PathPlanner(campus_graph, resolver=location_resolver)
session_store = SessionStore(idle_ttl_s=settings.SESSION_IDLE_TTL_S)
