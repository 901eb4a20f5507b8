"""Application assembly: container, routes and lifespan."""
