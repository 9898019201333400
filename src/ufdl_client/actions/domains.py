"""Implementation of the domains API."""

from __future__ import annotations

from ufdl_client.actions.action import ListAction


class Domains(ListAction):
    """For querying the data domains, e.g. image classification.

    Domains are read-only.
    """

    name = "Domains"
    path = "/v1/domains/"
    resource_name = "domain"
