from fastapi import Depends, Request

from .container import ApplicationContainer


def get_container(request: Request) -> ApplicationContainer:
    container = getattr(request.app.state, "container", None)
    if not container:
        raise RuntimeError("Application container not initialised.")
    return container


def get_profile_service(container: ApplicationContainer = Depends(get_container)):
    return container.profile_service


def get_templates(container: ApplicationContainer = Depends(get_container)):
    return container.templates


def get_write_limiter(container: ApplicationContainer = Depends(get_container)):
    return container.write_limiter


def get_access_gate(container: ApplicationContainer = Depends(get_container)):
    return container.access_gate
