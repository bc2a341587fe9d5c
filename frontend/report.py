"""Optimization report rendering.

``build_report_view`` turns an OptimizationResult into display values (labels,
colours, placeholders). ``render_report`` draws that view with Streamlit.
"""
from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Tuple

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from backend.models import OptimizationResult

STATUS_OVER_MODELED = "Over-Modeled"
STATUS_OPTIMIZED = "Optimized"

ACCENT_COLOR = "#0078d4"
WARNING_COLOR = "#d83b01"
SUCCESS_COLOR = "#107c10"
TRACK_COLOR = "#2d2d30"

HIGH_COMPLEXITY_THRESHOLD = 70

# badge background, badge text
IMPACT_COLORS = {
    "High": ("#7f1d1d", "#fecaca"),
    "Medium": ("#713f12", "#fef08a"),
    "Low": ("#14532d", "#bbf7d0"),
}

NO_SUGGESTIONS = "No optimization opportunities identified."
NO_SYMBOLIC_CANDIDATES = "No obvious candidates detected."
NO_UNUSED_PARAMS = "No suspicious parameters flagged."
UNUSED_PARAMS_NOTE = (
    "*Inferred based on category standards and visual inspection. Verify in Revit."
)

REPORT_CSS = """
<style>
    .status-card {
        border-left: 4px solid;
        border-radius: 8px;
        padding: 16px 20px;
        background-color: rgba(45, 45, 48, 0.6);
    }
    .status-card .label {
        font-size: 0.8rem;
        text-transform: uppercase;
        letter-spacing: 0.05em;
        color: #9ca3af;
    }
    .status-card .value {
        font-size: 1.6rem;
        font-weight: bold;
        margin: 0;
    }
    .suggestion-card {
        background-color: #2d2d30;
        border-left: 2px solid #0078d4;
        border-radius: 4px;
        padding: 12px 16px;
        margin-bottom: 12px;
    }
    .suggestion-card h4 {
        margin: 0 0 4px 0;
        color: #e5e7eb;
        font-size: 1rem;
    }
    .suggestion-card p {
        margin: 0;
        color: #9ca3af;
        font-size: 0.9rem;
    }
    .impact-badge {
        float: right;
        font-family: monospace;
        font-size: 0.75rem;
        padding: 2px 8px;
        border-radius: 4px;
    }
    .param-tag {
        display: inline-block;
        padding: 4px 12px;
        margin: 0 6px 6px 0;
        background-color: #1e1e1e;
        border: 1px solid #374151;
        border-radius: 9999px;
        font-size: 0.8rem;
        color: #9ca3af;
    }
    .empty-state {
        color: #6b7280;
        font-style: italic;
    }
</style>
"""


@dataclass(frozen=True)
class SuggestionCard:
    title: str
    description: str
    suggestion_type: str
    impact: str
    badge: str
    badge_color: str
    badge_text_color: str


@dataclass(frozen=True)
class ListSection:
    items: tuple
    placeholder: str

    @property
    def is_empty(self) -> bool:
        return not self.items


@dataclass(frozen=True)
class ReportView:
    status: str
    status_color: str
    status_icon: str
    score_label: str
    score_split: Tuple[float, float]
    score_color: str
    polygon_estimate: str
    suggestions: ListSection
    symbolic_candidates: ListSection
    unused_params: ListSection
    lod_recommendations: str
    overall_analysis: str


def format_score(score) -> str:
    if isinstance(score, float) and score.is_integer():
        return str(int(score))
    return str(score)


def _suggestion_card(suggestion) -> SuggestionCard:
    badge_color, badge_text_color = IMPACT_COLORS.get(suggestion.impact, (TRACK_COLOR, "#e5e7eb"))
    return SuggestionCard(
        title=suggestion.title,
        description=suggestion.description,
        suggestion_type=suggestion.type,
        impact=suggestion.impact,
        badge=f"{suggestion.impact} Impact",
        badge_color=badge_color,
        badge_text_color=badge_text_color,
    )


def build_report_view(result: OptimizationResult) -> ReportView:
    if result.is_over_modeled:
        status, status_color, status_icon = STATUS_OVER_MODELED, WARNING_COLOR, "⚠️"
    else:
        status, status_color, status_icon = STATUS_OPTIMIZED, SUCCESS_COLOR, "✅"

    score = result.complexity_score
    score_color = WARNING_COLOR if score > HIGH_COMPLEXITY_THRESHOLD else ACCENT_COLOR

    return ReportView(
        status=status,
        status_color=status_color,
        status_icon=status_icon,
        score_label=format_score(score),
        score_split=(score, 100 - score),
        score_color=score_color,
        polygon_estimate=result.polygon_estimate,
        suggestions=ListSection(
            items=tuple(_suggestion_card(s) for s in result.suggestions),
            placeholder=NO_SUGGESTIONS,
        ),
        symbolic_candidates=ListSection(
            items=tuple(result.symbolic_candidates),
            placeholder=NO_SYMBOLIC_CANDIDATES,
        ),
        unused_params=ListSection(
            items=tuple(result.unused_params),
            placeholder=NO_UNUSED_PARAMS,
        ),
        lod_recommendations=result.lod_recommendations,
        overall_analysis=result.overall_analysis,
    )


def complexity_chart(view: ReportView) -> go.Figure:
    """Half-donut gauge: complexity vs. remaining headroom out of 100."""
    complexity, headroom = view.score_split
    # The third, transparent slice fills the lower half of the donut
    fig = go.Figure(
        go.Pie(
            values=[complexity, headroom, 100],
            labels=["Complexity", "Optimized", ""],
            marker=dict(colors=[view.score_color, TRACK_COLOR, "rgba(0,0,0,0)"]),
            hole=0.6,
            rotation=-90,
            direction="clockwise",
            sort=False,
            textinfo="none",
            hoverinfo="label+value",
        )
    )
    fig.add_annotation(
        text=f"<b>{view.score_label}</b><span style='font-size:12px;color:#6b7280'>/100</span>",
        x=0.5,
        y=0.55,
        showarrow=False,
        font=dict(size=24),
    )
    fig.update_layout(
        height=180,
        margin=dict(l=0, r=0, t=0, b=0),
        showlegend=False,
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def suggestions_frame(view: ReportView) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "Title": [card.title for card in view.suggestions.items],
            "Type": [card.suggestion_type for card in view.suggestions.items],
            "Impact": [card.impact for card in view.suggestions.items],
        }
    )


def _empty_state(text: str) -> str:
    return f'<span class="empty-state">{html.escape(text)}</span>'


def _status_card_html(view: ReportView) -> str:
    return f"""
    <div class="status-card" style="border-color: {view.status_color};">
        <div class="label">Status</div>
        <p class="value" style="color: {view.status_color};">{view.status_icon} {html.escape(view.status)}</p>
    </div>
    """


def _suggestion_card_html(card: SuggestionCard) -> str:
    return f"""
    <div class="suggestion-card">
        <span class="impact-badge" style="background-color: {card.badge_color}; color: {card.badge_text_color};">{html.escape(card.badge)}</span>
        <h4>{html.escape(card.title)}</h4>
        <p>{html.escape(card.description)}</p>
    </div>
    """


def render_report(result: OptimizationResult) -> bool:
    """Draw the optimization report. Returns True when the user asks to start over."""
    view = build_report_view(result)

    title_col, reset_col = st.columns([4, 1])
    with title_col:
        st.header("📊 Optimization Report")
    with reset_col:
        reset_clicked = st.button("Analyze Another Family", use_container_width=True)

    # Top stats row
    status_col, polygon_col, score_col = st.columns(3)
    with status_col:
        st.markdown(_status_card_html(view), unsafe_allow_html=True)
    with polygon_col:
        st.metric("🧊 Polygon Est.", view.polygon_estimate)
    with score_col:
        st.caption("COMPLEXITY SCORE")
        st.plotly_chart(complexity_chart(view), use_container_width=True)

    st.markdown("---")

    left_col, right_col = st.columns(2)

    with left_col:
        st.subheader("🔎 AI Analysis")
        st.write(view.overall_analysis)

        st.subheader("🛠️ Optimization Opportunities")
        if view.suggestions.is_empty:
            st.markdown(_empty_state(view.suggestions.placeholder), unsafe_allow_html=True)
        else:
            for card in view.suggestions.items:
                st.markdown(_suggestion_card_html(card), unsafe_allow_html=True)

            with st.expander("Suggestions overview"):
                st.dataframe(suggestions_frame(view), use_container_width=True, hide_index=True)

    with right_col:
        st.subheader("Solid to Symbolic")
        st.caption("Recommended for plan views")
        if view.symbolic_candidates.is_empty:
            st.markdown(_empty_state(view.symbolic_candidates.placeholder), unsafe_allow_html=True)
        else:
            st.markdown("\n".join(f"- {item}" for item in view.symbolic_candidates.items))

        st.subheader("🗑️ Potential Unused Parameters")
        st.caption(UNUSED_PARAMS_NOTE)
        if view.unused_params.is_empty:
            st.markdown(_empty_state(view.unused_params.placeholder), unsafe_allow_html=True)
        else:
            tags = "".join(
                f'<span class="param-tag">{html.escape(param)}</span>'
                for param in view.unused_params.items
            )
            st.markdown(tags, unsafe_allow_html=True)

        st.subheader("LOD Strategy")
        st.text(view.lod_recommendations)

    return reset_clicked
