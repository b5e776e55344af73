"""GraphQL adapter for OpenWhisk web actions."""

from ow_graphql.api.handler import InvocationHandler
from ow_graphql.api.schemas import HandlerOptions
from ow_graphql.api.schemas import LandingPage
from ow_graphql.exceptions import HttpQueryError
from ow_graphql.server.openwhisk import OpenWhiskGraphQLServer

__all__ = [
    "HandlerOptions",
    "HttpQueryError",
    "InvocationHandler",
    "LandingPage",
    "OpenWhiskGraphQLServer",
]
