"""GraphQL server integration for OpenWhisk web actions."""

from __future__ import annotations

from typing import Any
from typing import Mapping
from typing import Optional
from typing import Union

from ow_graphql.api.handler import InvocationHandler
from ow_graphql.api.schemas import HandlerOptions
from ow_graphql.server.base import GraphQLServerBase


class OpenWhiskGraphQLServer(GraphQLServerBase):
    """GraphQL server answering web action invocations."""

    def serverless_framework(self) -> bool:
        return True

    async def create_graphql_server_options(
        self,
        args: Mapping[str, Any],
    ) -> dict[str, Any]:
        """Build engine options with the raw action arguments as context."""
        return await self.graphql_server_options({"args": args})

    def create_handler(
        self,
        options: Union[HandlerOptions, Mapping[str, Any], None] = None,
    ) -> InvocationHandler:
        """Create the async entry point for this server.

        Each handler keeps its own landing page cache.
        """
        return InvocationHandler(
            server=self,
            runner=self.runner,
            options_factory=self.create_graphql_server_options,
            options=options,
        )
