"""GraphQL server lifecycle integrations."""

from ow_graphql.server.base import GraphQLServerBase
from ow_graphql.server.openwhisk import OpenWhiskGraphQLServer

__all__ = [
    "GraphQLServerBase",
    "OpenWhiskGraphQLServer",
]
