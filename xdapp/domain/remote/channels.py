"""
Remote channel implementations: ambient identity and alternate credentials.
"""

from __future__ import annotations

import logging
from typing import Any

from requests.auth import HTTPBasicAuth

from xdapp.config.messages import format_message
from xdapp.config.models import BrokerConnectionConfig
from xdapp.domain.broker import BrokerAPI
from xdapp.domain.icons import IconResolver
from xdapp.domain.remote.base import ExecutionContext, RemoteOperation
from xdapp.domain.types import Credential
from xdapp.observability import REMOTE_OPERATION_DURATION

logger = logging.getLogger("xdapp")


class DirectChannel:
    """Runs units of work as the ambient identity of this process."""

    def __init__(self, connection: BrokerConnectionConfig):
        self.connection = connection

    def _auth(self) -> HTTPBasicAuth | None:
        return None

    def _connect(self) -> ExecutionContext:
        api = BrokerAPI(
            self.connection.base_url,
            auth=self._auth(),
            api_key=self.connection.api_key,
            verify=self.connection.verify_tls,
            timeout=self.connection.timeout,
        )
        return ExecutionContext(api=api, icons=IconResolver(api))

    def _log_invocation(self, operation: RemoteOperation) -> None:
        logger.debug(format_message(
            "invoking_remote_operation",
            operation=operation.name,
            base_url=self.connection.base_url,
        ))

    def invoke(self, operation: RemoteOperation) -> Any:
        self._log_invocation(operation)
        context = self._connect()
        with REMOTE_OPERATION_DURATION.labels(operation=operation.name).time():
            return operation.execute(context)


class CredentialedChannel(DirectChannel):
    """Runs units of work under an alternate principal."""

    def __init__(self, connection: BrokerConnectionConfig, credential: Credential):
        super().__init__(connection)
        self.credential = credential

    def _auth(self) -> HTTPBasicAuth | None:
        return HTTPBasicAuth(self.credential.username, self.credential.password)

    def _log_invocation(self, operation: RemoteOperation) -> None:
        logger.debug(format_message(
            "invoking_remote_operation_as",
            operation=operation.name,
            base_url=self.connection.base_url,
            username=self.credential.username,
        ))
