"""Prompt builders for the scoring and theme-classification backend calls.

Both builders are pure: same ticket in, same prompt out. Missing ticket
fields are replaced by fixed placeholders so no prompt ever contains "None".
"""

from __future__ import annotations

from jira_triage.domain.entities.effort_estimate import EffortEstimate
from jira_triage.domain.entities.product_context import ProductContext
from jira_triage.domain.entities.ticket import Ticket
from jira_triage.domain.value_objects.theme import THEME_NOT_IDENTIFIED

TICKET_BLOCK_TEMPLATE = """\
TICKET DETAILS:
===============
Ticket Key: {key}
Title: {title}
Description: {description}
Reporter: {reporter}
Created: {created}
Priority: {priority}
Components: {components}
Labels: {labels}
Status: {status}"""

TRIAGE_PROMPT_TEMPLATE = """\
You are a Product Triage Specialist analyzing feature requests for prioritization.
Your goal is to provide actionable recommendations for Product Managers.

{ticket_block}

PRODUCT CONTEXT:
================
Product: {product} (detection confidence: {product_confidence})
Overview: {overview}
Capabilities:
{capabilities}
Relevant existing features:
{relevant_features}

PRELIMINARY EFFORT ESTIMATE:
============================
Size: {effort_size} - {effort_description}
Reasoning: {effort_reasoning}
(Use this as a hint only; override it if the ticket clearly says otherwise.)

ANALYSIS FRAMEWORK:
==================

1. BUSINESS IMPACT ASSESSMENT (Score 0-100)
   Evaluate:
   - Number of clients affected (consider reporter's organization)
   - Revenue impact (retention risk, expansion opportunity)
   - Urgency indicators in description
   - Competitive disadvantage if not addressed
   - Strategic client importance

2. EFFORT ESTIMATION
   Classify as:
   - XS: 1-2 weeks (simple config/UI change)
   - S: 2-4 weeks (single service change)
   - M: 1-2 months (multiple services, moderate complexity)
   - L: 2-4 months (architectural changes, complex logic)
   - XL: 4+ months (platform changes, major overhaul)

3. STRATEGIC ALIGNMENT (Score 0-100)
   Assess:
   - Alignment with product direction
   - Technical debt implications
   - Platform capability enhancement
   - Market positioning improvement

4. CROSS-CLIENT VALUE (Score 0-100)
   Determine:
   - Client-specific vs broadly applicable
   - Potential adoption across customer base
   - Universal platform improvement

5. OVERALL PRIORITY CALCULATION
   Weighted average:
   - Business Impact: 35%
   - Strategic Alignment: 25%
   - Cross-Client Value: 25%
   - Effort (inverse): 15%

PRIORITY RECOMMENDATION RULES:
==============================
- Overall Priority 80-100: "Fast Track" (Critical priority, immediate action)
- Overall Priority 50-79: "Standard" (Normal triage queue)
- Overall Priority 25-49: "On Hold" (Low priority, revisit quarterly)
- Overall Priority 0-24: "Low" (Decline or defer indefinitely)

REQUIRED OUTPUT FORMAT (JSON):
=============================
Provide your analysis in this EXACT JSON structure:
{{
  "scores": {{
    "business_impact": <0-100>,
    "effort_size": "<XS|S|M|L|XL>",
    "effort_score": <0-100, where XS=100, S=80, M=60, L=40, XL=20>,
    "strategic_fit": <0-100>,
    "cross_client_value": <0-100>,
    "overall_priority": <calculated weighted average>
  }},
  "priority_recommendation": "<Fast Track|Standard|On Hold|Low>",
  "key_insights": [
    "<specific insight about business value>",
    "<specific insight about implementation>",
    "<specific insight about strategic fit>"
  ],
  "risks": [
    "<primary risk if we build this>",
    "<primary risk if we don't build this>"
  ],
  "opportunities": [
    "<primary opportunity this enables>",
    "<secondary opportunity or benefit>"
  ],
  "similar_features": "<brief description of related existing features or similar tickets>",
  "recommended_next_steps": [
    "<immediate next step for PM>",
    "<validation or research needed>",
    "<stakeholder alignment required>"
  ],
  "executive_summary": "<2-3 sentence summary capturing the essence of this request and your recommendation>",
  "on_hold_reasoning": "<only when recommending On Hold: what would change the decision>"
}}

Ensure all JSON fields are populated. Be specific and actionable in your insights and recommendations."""

THEME_PROMPT_TEMPLATE = """\
You are classifying a {product} ticket into exactly one functional theme.

{ticket_block}

ALLOWED THEMES:
===============
{themes}

RULES:
- Answer with exactly one theme from the list above, copied verbatim.
- If none of the themes fits, answer exactly: {not_identified}
- Do NOT add explanations, punctuation, quotes, markdown or any other text."""


def _bullets(items: tuple[str, ...] | list[str]) -> str:
    if not items:
        return "- None"
    return "\n".join(f"- {item}" for item in items)


def build_ticket_block(ticket: Ticket) -> str:
    return TICKET_BLOCK_TEMPLATE.format(
        key=ticket.key,
        title=ticket.title or "No title provided",
        description=ticket.description or "No description provided",
        reporter=ticket.reporter or "Unknown",
        created=ticket.created or "Unknown",
        priority=ticket.priority or "Not set",
        components=", ".join(ticket.components) or "None",
        labels=", ".join(ticket.labels) or "None",
        status=ticket.status or "Unknown",
    )


def build_triage_prompt(
    ticket: Ticket,
    product_context: ProductContext,
    effort: EffortEstimate,
) -> str:
    """Build the scoring prompt, including the required JSON output contract."""
    knowledge = product_context.knowledge
    return TRIAGE_PROMPT_TEMPLATE.format(
        ticket_block=build_ticket_block(ticket),
        product=product_context.product.value,
        product_confidence=product_context.confidence.value,
        overview=knowledge.overview,
        capabilities=_bullets(knowledge.capabilities),
        relevant_features=_bullets(knowledge.relevant_features),
        effort_size=effort.size.value,
        effort_description=effort.size_description,
        effort_reasoning=effort.reasoning,
    )


def build_theme_prompt(ticket: Ticket, product_context: ProductContext) -> str:
    """Build the theme-classification prompt for the detected product's vocabulary."""
    return THEME_PROMPT_TEMPLATE.format(
        product=product_context.product.value,
        ticket_block=build_ticket_block(ticket),
        themes=_bullets(product_context.themes),
        not_identified=THEME_NOT_IDENTIFIED,
    )
