"""``desk`` command: seed and inspect a Desk account from the command line.

Examples:
    desk --resource customers --action create --count 5
    desk --resource tickets --action get --id 42
    desk --resource companies --action update --id 7 --data '{"name": "Acme"}'
    desk --resource all --action create

Every option falls back to a ``DESK_*`` environment variable, and a ``.env``
file in the working directory is loaded first.
"""

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

import click
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from desk_sdk._version import __version__
from desk_sdk.client import DeskClient
from desk_sdk.exceptions import DeskError
from desk_sdk.fixtures import Fixtures, find_ticket_type, merge_data
from desk_sdk.resource import Service

DEFAULT_BASE_URL = "https://mycompany.teamwork.com/desk/api/v2"

ACTIONS = ("get", "list", "create", "update")

# resource name -> (client service attribute, envelope entity field)
RESOURCES: dict[str, tuple[str, str]] = {
    "businesshours": ("business_hours", "business_hour"),
    "companies": ("companies", "company"),
    "customers": ("customers", "customer"),
    "files": ("files", "file"),
    "helpdocarticles": ("help_doc_articles", "help_doc_article"),
    "helpdocsites": ("help_doc_sites", "help_doc_site"),
    "inboxes": ("inboxes", "inbox"),
    "priorities": ("ticket_priorities", "ticket_priority"),
    "slas": ("slas", "sla"),
    "spamlists": ("spamlists", "spamlist"),
    "statuses": ("ticket_statuses", "ticket_status"),
    "tags": ("tags", "tag"),
    "tickets": ("tickets", "ticket"),
    "types": ("ticket_types", "ticket_type"),
    "users": ("users", "user"),
}

# Expansion of ``--resource all``.
ALL_RESOURCES = (
    "businesshours",
    "companies",
    "customers",
    "inboxes",
    "priorities",
    "slas",
    "spamlists",
    "statuses",
    "tags",
    "tickets",
    "types",
)

logger = logging.getLogger(__name__)


class MissingPrerequisiteError(click.ClickException):
    """A resource the generated entity must reference does not exist yet."""


class Seeder:
    """Runs one action against one resource, generating payloads as needed.

    Args:
        client: Client used for every call.
        fixtures: Source of generated payloads.
        data: JSON object merged over every generated entity.
    """

    def __init__(
        self,
        client: DeskClient,
        fixtures: Fixtures,
        data: dict[str, Any] | None = None,
    ) -> None:
        self.client = client
        self.fixtures = fixtures
        self.data = data
        self._builders: dict[str, Callable[[], Awaitable[BaseModel]]] = {
            "businesshours": self._static(fixtures.business_hour),
            "companies": self._static(fixtures.company),
            "customers": self._static(fixtures.customer),
            "files": self._static(fixtures.file),
            "helpdocarticles": self._static(fixtures.help_doc_article),
            "helpdocsites": self._static(fixtures.help_doc_site),
            "inboxes": self._build_inbox,
            "priorities": self._static(fixtures.ticket_priority),
            "slas": self._build_sla,
            "spamlists": self._static(fixtures.spamlist),
            "statuses": self._static(fixtures.ticket_status),
            "tags": self._static(fixtures.tag),
            "tickets": self._build_ticket,
            "types": self._static(fixtures.ticket_type),
            "users": self._static(fixtures.user),
        }

    async def run(self, resource: str, action: str, id: int = 0) -> BaseModel:
        service_name, _ = RESOURCES[resource]
        service: Service = getattr(self.client, service_name)

        if action == "get":
            return await service.get(id)
        if action == "list":
            return await service.list()
        if resource == "files" and action == "create":
            return await self.upload_file()

        envelope = await self.build(resource)
        if action == "create":
            return await service.create(envelope)
        if action == "update":
            return await service.update(id, envelope)
        raise click.BadParameter(f"unknown action {action!r}", param_hint="--action")

    async def build(self, resource: str) -> BaseModel:
        """Generate the envelope for ``resource`` with ``data`` merged into its entity."""
        envelope = await self._builders[resource]()
        if self.data:
            _, field = RESOURCES[resource]
            try:
                merged = merge_data(getattr(envelope, field), self.data)
            except ValidationError as e:
                raise click.BadParameter(str(e), param_hint="--data") from e
            setattr(envelope, field, merged)
        return envelope

    async def upload_file(self) -> BaseModel:
        """Register a file reference, then upload generated image bytes to it."""
        descriptor = await self.client.files.create(await self.build("files"))
        await self.client.files.upload(descriptor, self.fixtures.image_jpeg())
        return descriptor

    async def _require(self, service: Service, field: str, label: str) -> list[Any]:
        page = await service.list()
        items = getattr(page, field)
        if not items:
            raise MissingPrerequisiteError(f"No {label} found. Please create one first.")
        return items

    @staticmethod
    def _static(factory: Callable[[], BaseModel]) -> Callable[[], Awaitable[BaseModel]]:
        async def build() -> BaseModel:
            return factory()

        return build

    async def _build_inbox(self) -> BaseModel:
        users = await self._require(self.client.users, "users", "users")
        return self.fixtures.inbox(users)

    async def _build_ticket(self) -> BaseModel:
        inboxes = await self._require(self.client.inboxes, "inboxes", "inboxes")
        customers = await self._require(self.client.customers, "customers", "customers")
        ticket_types = await self._require(
            self.client.ticket_types, "ticket_types", "ticket types"
        )
        match = find_ticket_type(ticket_types, inboxes)
        if match is None:
            raise MissingPrerequisiteError(
                "No ticket types associated with the available inboxes."
            )
        await self._require(self.client.ticket_sources, "ticket_sources", "ticket sources")
        await self._require(self.client.ticket_statuses, "ticket_statuses", "ticket statuses")
        await self._require(self.client.users, "users", "users")

        ticket_type, inbox = match
        return self.fixtures.ticket(inbox=inbox, customer=customers[0], ticket_type=ticket_type)

    async def _build_sla(self) -> BaseModel:
        client = self.client
        priorities = await self._require(
            client.ticket_priorities, "ticket_priorities", "ticket priorities"
        )
        tags = await self._require(client.tags, "tags", "tags")
        companies = await self._require(client.companies, "companies", "companies")
        customers = await self._require(client.customers, "customers", "customers")
        inboxes = await self._require(client.inboxes, "inboxes", "inboxes")
        business_hours = await self._require(
            client.business_hours, "business_hours", "business hours"
        )
        return self.fixtures.sla(
            business_hour=business_hours[0],
            priorities=priorities,
            inboxes=inboxes,
            companies=companies,
            customers=customers,
            tags=tags,
        )


def parse_data(value: str | None) -> dict[str, Any] | None:
    if not value:
        return None
    try:
        data = json.loads(value)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"invalid JSON: {e}", param_hint="--data") from e
    if not isinstance(data, dict):
        raise click.BadParameter("must be a JSON object", param_hint="--data")
    return data


async def run(
    client: DeskClient,
    resources: Sequence[str],
    action: str,
    *,
    count: int,
    id: int,
    data: dict[str, Any] | None,
    seed: int | None,
) -> None:
    seeder = Seeder(client, Fixtures(seed), data)
    async with client:
        for resource in resources:
            for _ in range(count):
                result = await seeder.run(resource, action, id)
                click.echo(result.model_dump_json(by_alias=True, exclude_unset=True, indent=2))


@click.command()
@click.version_option(version=__version__, prog_name="desk")
@click.option("--api-key", envvar="DESK_API_KEY", default="", help="Desk API key")
@click.option("--base-url", envvar="DESK_BASE_URL", default=DEFAULT_BASE_URL, help="Desk API base URL")
@click.option(
    "--resource",
    envvar="DESK_RESOURCE",
    default="tickets",
    type=click.Choice(sorted(RESOURCES) + ["all"]),
    help="Resource to interact with",
)
@click.option(
    "--action",
    envvar="DESK_ACTION",
    default="list",
    type=click.Choice(ACTIONS),
    help="Action to perform",
)
@click.option(
    "--count",
    envvar="DESK_COUNT",
    default=1,
    type=click.IntRange(min=1),
    help="Number of resources to create (create only)",
)
@click.option("--id", "resource_id", default=0, type=int, help="Resource ID for get/update")
@click.option("--data", default=None, help="JSON object merged into generated payloads")
@click.option("--seed", default=None, type=int, help="Seed for reproducible payloads")
@click.option("--debug", is_flag=True, help="Log every request and response")
def cli(
    api_key: str,
    base_url: str,
    resource: str,
    action: str,
    count: int,
    resource_id: int,
    data: str | None,
    seed: int | None,
    debug: bool,
) -> None:
    """Seed and inspect a Desk account."""
    if not api_key:
        raise click.UsageError(
            "API key is required. Set it via --api-key or the DESK_API_KEY environment variable"
        )
    if action != "create":
        count = 1
    payload = parse_data(data)

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    resources = ALL_RESOURCES if resource == "all" else (resource,)
    client = DeskClient(base_url, api_key=api_key, debug=debug)
    try:
        asyncio.run(
            run(client, resources, action, count=count, id=resource_id, data=payload, seed=seed)
        )
    except DeskError as e:
        logger.debug("command failed", exc_info=True)
        raise click.ClickException(str(e)) from e


def main() -> None:
    load_dotenv()
    cli()


if __name__ == "__main__":
    main()
