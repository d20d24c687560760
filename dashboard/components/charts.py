"""Reusable chart components for the dashboard."""

import plotly.graph_objects as go

from rate_savings.output.chart_data import ChartSeries

LINE_COLORS = {
    "annual_savings": "#28a745",
    "baseline_cost": "#dc3545",
    "comparison_cost": "#1F4E79",
}


def create_savings_chart(series: ChartSeries) -> go.Figure:
    """Create the cost and savings line chart with milestone bubbles.

    Args:
        series: Chart data built from a projection

    Returns:
        Plotly figure
    """
    fig = go.Figure()

    if series.is_empty:
        return fig

    for dataset in series.datasets:
        fig.add_trace(go.Scatter(
            x=series.labels,
            y=dataset.values,
            mode="lines+markers" if dataset.key == "annual_savings" else "lines",
            name=dataset.label,
            line=dict(color=LINE_COLORS.get(dataset.key), width=2, shape="spline", smoothing=0.4),
            marker=dict(size=4),
        ))

    # Monthly cost bubbles sit above the baseline cost line
    for annotation in series.annotations:
        fig.add_annotation(
            x=series.labels[annotation.index],
            y=annotation.baseline_cost,
            text=annotation.text,
            showarrow=True,
            arrowhead=0,
            ay=-30,
            font=dict(color="#ffffff", size=12),
            bgcolor="rgba(39, 174, 96, 0.9)",
            borderpad=6,
        )

    fig.update_layout(
        xaxis_title="Year",
        yaxis_title="Dollars ($/yr)",
        legend=dict(orientation="h", yanchor="bottom", y=1.02),
        margin=dict(t=40, b=20, l=20, r=20),
        hovermode="x unified",
    )

    return fig


def create_cumulative_chart(years: list, cumulative: list) -> go.Figure:
    """Create a cumulative savings area chart.

    Args:
        years: Year labels
        cumulative: Cumulative savings per year

    Returns:
        Plotly figure
    """
    fig = go.Figure()

    fig.add_trace(go.Scatter(
        x=years,
        y=cumulative,
        mode='lines+markers',
        name='Cumulative Savings',
        line=dict(color='#28a745', width=3),
        fill='tozeroy',
        fillcolor='rgba(40, 167, 69, 0.2)'
    ))

    fig.update_layout(
        xaxis_title="Year",
        yaxis_title="Cumulative Savings ($)"
    )

    return fig
