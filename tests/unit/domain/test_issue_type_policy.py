"""Tests for IssueTypePolicy."""

from jira_triage.domain.entities.ticket import Ticket
from jira_triage.domain.policies.issue_type import classify_issue_type
from jira_triage.domain.value_objects.enums import IssueClassification


def test_feature_request(enterprise_ticket):
    assert classify_issue_type(enterprise_ticket) == IssueClassification.FEATURE


def test_bug_report():
    ticket = Ticket(
        key="PROJ-1",
        title="Login page crashes with 500 error",
        description="Steps to reproduce: open the page. Users are unable to log in.",
        labels=("bug",),
    )
    assert classify_issue_type(ticket) == IssueClassification.BUG


def test_bug_label_alone_tips_the_balance():
    ticket = Ticket(key="PROJ-2", title="Export button", labels=("regression",))
    assert classify_issue_type(ticket) == IssueClassification.BUG


def test_does_not_work_phrase():
    ticket = Ticket(key="PROJ-3", title="Save doesn't work on the profile page")
    assert classify_issue_type(ticket) == IssueClassification.BUG


def test_tie_is_feature():
    assert classify_issue_type(Ticket(key="PROJ-4", title="Something")) == IssueClassification.FEATURE
