"""Architecture tests using pytest-archon.

These tests enforce DDD layer boundaries inside the iam and notes bounded
contexts, and the single seam through which notes reaches into iam.
"""

import pytest
from pytest_archon import archrule

CONTEXTS = ["iam", "notes"]


@pytest.mark.parametrize("context", CONTEXTS)
class TestDomainLayerBoundaries:
    """The domain layer holds pure business logic."""

    def test_domain_does_not_import_outer_layers(self, context):
        (
            archrule(f"{context}_domain_is_pure")
            .match(f"{context}.domain*")
            .should_not_import(
                f"{context}.application*",
                f"{context}.infrastructure*",
                f"{context}.presentation*",
                f"{context}.dependencies*",
            )
            .check(context)
        )

    def test_domain_does_not_import_frameworks(self, context):
        (
            archrule(f"{context}_domain_no_frameworks")
            .match(f"{context}.domain*")
            .should_not_import("fastapi*", "starlette*", "sqlalchemy*", "httpx*")
            .check(context)
        )


@pytest.mark.parametrize("context", CONTEXTS)
class TestPortsAndApplicationBoundaries:
    def test_ports_do_not_import_implementations(self, context):
        (
            archrule(f"{context}_ports_no_infrastructure")
            .match(f"{context}.ports*")
            .should_not_import(
                f"{context}.infrastructure*", f"{context}.application*"
            )
            .check(context)
        )

    def test_application_does_not_import_infrastructure(self, context):
        """Services depend on ports, not on repository implementations."""
        (
            archrule(f"{context}_application_no_infrastructure")
            .match(f"{context}.application*")
            .should_not_import(
                f"{context}.infrastructure*",
                f"{context}.presentation*",
                "fastapi*",
            )
            .check(context)
        )

    def test_infrastructure_does_not_import_presentation(self, context):
        (
            archrule(f"{context}_infrastructure_no_presentation")
            .match(f"{context}.infrastructure*")
            .should_not_import(f"{context}.presentation*", f"{context}.application*")
            .check(context)
        )


class TestNotesIsolationFromIam:
    """Notes core knows nothing about iam; only its HTTP edge does."""

    @pytest.mark.parametrize("layer", ["domain", "ports", "application"])
    def test_notes_core_does_not_import_iam(self, layer):
        (
            archrule(f"notes_{layer}_no_iam")
            .match(f"notes.{layer}*")
            .should_not_import("iam*")
            .check("notes")
        )

    def test_notes_infrastructure_does_not_import_iam(self):
        """The tenant plan is read through a lightweight table, not iam models."""
        (
            archrule("notes_infrastructure_no_iam")
            .match("notes.infrastructure*")
            .should_not_import("iam*")
            .check("notes")
        )

    def test_iam_does_not_import_notes(self):
        (
            archrule("iam_no_notes")
            .match("iam*")
            .should_not_import("notes*")
            .check("iam")
        )


class TestSharedKernel:
    def test_shared_kernel_does_not_import_contexts(self):
        (
            archrule("shared_kernel_standalone")
            .match("shared_kernel*")
            .should_not_import("iam*", "notes*", "infrastructure*")
            .check("shared_kernel")
        )
