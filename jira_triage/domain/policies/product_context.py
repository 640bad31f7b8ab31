"""ProductContextPolicy — detect the product line a ticket belongs to.

Detection is a priority-ordered list of marker checks; a marker must start a
word ("report" hits "reporting", "ios" misses "scenarios"). The first product
whose markers appear wins; where the marker was found sets the confidence:

  * component name   →  High
  * ticket title     →  Medium
  * description/labels → Low

Each product carries a static knowledge block that is pasted verbatim into
the scoring prompt, and a controlled theme vocabulary for classification.
"""

from __future__ import annotations

import re

from jira_triage.domain.entities.product_context import ProductContext, ProductKnowledge
from jira_triage.domain.entities.ticket import Ticket
from jira_triage.domain.value_objects.enums import ConfidenceLevel, Product

PRODUCT_KNOWLEDGE: dict[Product, ProductKnowledge] = {
    Product.MOBILE_APP: ProductKnowledge(
        overview="Native iOS and Android companion app for end users and field staff.",
        capabilities=(
            "Offline mode with background sync",
            "Push notifications",
            "Biometric login",
            "In-app approvals",
        ),
        relevant_features=("Push notification preferences", "Offline queue", "Mobile dashboards"),
        themes=(
            "Mobile Experience",
            "Offline & Sync",
            "Push Notifications",
            "Mobile Authentication",
            "Mobile Performance",
        ),
    ),
    Product.ANALYTICS: ProductKnowledge(
        overview="Reporting and analytics suite built on the platform data warehouse.",
        capabilities=(
            "Configurable dashboards",
            "Scheduled report delivery",
            "CSV/Excel export",
            "Ad hoc query builder",
        ),
        relevant_features=("Dashboard widgets", "Report scheduler", "Data export"),
        themes=(
            "Dashboards & Visualization",
            "Report Scheduling",
            "Data Export",
            "Metrics & KPIs",
            "Data Quality",
        ),
    ),
    Product.INTEGRATIONS: ProductKnowledge(
        overview="Public REST API, webhooks and prebuilt connectors to third-party systems.",
        capabilities=(
            "REST API with OAuth2",
            "Outbound webhooks",
            "Salesforce, SAP and Slack connectors",
            "Bulk data import",
        ),
        relevant_features=("Webhook subscriptions", "Connector marketplace", "Bulk import API"),
        themes=(
            "API & Developer Experience",
            "Webhooks & Events",
            "Third-Party Connectors",
            "Data Import",
            "Single Sign-On",
        ),
    ),
    Product.CORE_PLATFORM: ProductKnowledge(
        overview="Multi-tenant web platform: accounts, workflow engine, permissions and admin console.",
        capabilities=(
            "Role-based access control",
            "Configurable workflows",
            "Audit logging",
            "Tenant administration",
        ),
        relevant_features=("Workflow builder", "User management", "Admin console", "User preferences"),
        themes=(
            "User Interface & Usability",
            "Workflow Automation",
            "User & Access Management",
            "Security & Compliance",
            "Performance & Scalability",
            "Data Management",
        ),
    ),
    Product.UNKNOWN: ProductKnowledge(
        overview="No specific product line was detected for this ticket.",
        capabilities=(),
        relevant_features=(),
        themes=(
            "User Interface & Usability",
            "Performance & Scalability",
            "Security & Compliance",
            "Integrations",
            "Reporting",
            "Data Management",
        ),
    ),
}

# Order matters: more specific product lines are checked first.
PRODUCT_MARKERS: list[tuple[Product, tuple[str, ...]]] = [
    (Product.MOBILE_APP, ("mobile", "ios", "android", "iphone", "tablet", "push notification")),
    (Product.ANALYTICS, ("analytics", "report", "dashboard", "chart", "metric", "kpi")),
    (Product.INTEGRATIONS, ("api", "webhook", "integration", "connector", "salesforce", "sso", "import")),
    (Product.CORE_PLATFORM, ("platform", "workflow", "permission", "admin", "user interface", "preference", "data management")),
]


def _contains_any(text: str, markers: tuple[str, ...]) -> bool:
    return any(re.search(rf"\b{re.escape(m)}", text) for m in markers)


def detect_product(ticket: Ticket) -> ProductContext:
    """Pure function: return the product context for *ticket*."""
    components = " | ".join(ticket.lowered_components())
    title = (ticket.title or "").lower()
    rest = " ".join([(ticket.description or "").lower(), *ticket.lowered_labels()])

    for source, confidence in (
        (components, ConfidenceLevel.HIGH),
        (title, ConfidenceLevel.MEDIUM),
        (rest, ConfidenceLevel.LOW),
    ):
        if not source:
            continue
        for product, markers in PRODUCT_MARKERS:
            if _contains_any(source, markers):
                return ProductContext(
                    product=product,
                    confidence=confidence,
                    knowledge=PRODUCT_KNOWLEDGE[product],
                )

    return ProductContext(
        product=Product.UNKNOWN,
        confidence=ConfidenceLevel.LOW,
        knowledge=PRODUCT_KNOWLEDGE[Product.UNKNOWN],
    )
