"""Pytest configuration and shared fixtures."""

import pytest

from jira_triage.domain.entities.ticket import Ticket


@pytest.fixture
def enterprise_ticket():
    return Ticket(
        key="PROJ-123",
        title="Add bulk import feature for customer data",
        description=(
            "Enterprise clients need to import large CSV files with customer data. "
            "Current manual entry is too slow for their needs."
        ),
        reporter="Sarah Johnson",
        created="2024-01-15T10:30:00.000Z",
        priority="High",
        components=("Data Management",),
        labels=("enterprise", "customer-request"),
        status="Open",
    )


@pytest.fixture
def dark_mode_ticket():
    return Ticket(
        key="PROJ-124",
        title="Add dark mode toggle to user preferences",
        description=(
            "Users have requested a dark mode option for better visibility in "
            "low-light environments. This would be a simple UI enhancement."
        ),
        reporter="John Doe",
        priority="Medium",
        components=("User Interface",),
        labels=("ui", "user-request", "enhancement"),
        status="Open",
    )


@pytest.fixture
def bare_ticket():
    return Ticket(key="PROJ-999", title="Something")


@pytest.fixture
def analysis_payload():
    return {
        "scores": {
            "business_impact": 85,
            "effort_size": "M",
            "effort_score": 60,
            "strategic_fit": 75,
            "cross_client_value": 80,
            "overall_priority": 78,
        },
        "priority_recommendation": "Standard",
        "key_insights": ["High business impact", "Moderate effort"],
        "risks": ["Complexity in implementation"],
        "opportunities": ["Platform improvement"],
        "similar_features": "Existing CSV export",
        "recommended_next_steps": ["Validate requirements"],
        "executive_summary": "This feature addresses critical needs.",
    }
