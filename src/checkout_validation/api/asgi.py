"""ASGI entrypoint for the checkout validation host."""

from checkout_validation.api.app import create_app
from checkout_validation.containers import build_container

app = create_app(build_container())
