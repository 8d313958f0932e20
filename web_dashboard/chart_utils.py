#!/usr/bin/env python3
"""
Chart utilities for the dashboard views, built with Plotly.

Features:
- Price area and volume bar charts for time-series sheets
- Returns bar chart by asset
- Multi-series area/bar/line charts for dynamic sheets
- Weekend shading to highlight market closures
"""

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

import pandas as pd
import plotly.graph_objs as go

PRICE_COLOR = '#3b82f6'
VOLUME_COLOR = '#10b981'
RETURNS_COLOR = '#8b5cf6'
SERIES_COLORS = ['#3b82f6', '#10b981', '#f59e0b', '#ef4444', '#8b5cf6']

CHART_TYPES = ["area", "bar", "line"]


def _series_frame(series: List[Dict[str, Any]], value_column: str) -> pd.DataFrame:
    """Time-series records as a frame with parsed Date and numeric value."""
    if not series:
        return pd.DataFrame(columns=['Date', value_column])
    df = pd.DataFrame(series)
    if 'Date' not in df.columns or value_column not in df.columns:
        return pd.DataFrame(columns=['Date', value_column])
    df['Date'] = pd.to_datetime(df['Date'], errors='coerce', utc=True, format='mixed')
    df[value_column] = pd.to_numeric(df[value_column], errors='coerce')
    return df.dropna(subset=['Date']).sort_values('Date')


def _base_layout(fig: go.Figure, title: Optional[str], height: int = 400) -> go.Figure:
    fig.update_layout(
        title=title,
        height=height,
        template='plotly_white',
        hovermode='x unified',
        margin=dict(l=40, r=20, t=50 if title else 20, b=40),
        legend=dict(orientation='h', yanchor='bottom', y=1.02, xanchor='right', x=1),
    )
    return fig


def _add_weekend_shading(fig: go.Figure, start_date: datetime, end_date: datetime) -> None:
    """Add light gray shading over weekends (Saturday 00:00 to Monday 00:00)."""
    current = start_date.date() if isinstance(start_date, datetime) else start_date
    end = end_date.date() if isinstance(end_date, datetime) else end_date

    # Step back to the Saturday of a weekend the range starts in
    if current.weekday() == 6:
        current -= timedelta(days=1)

    while current <= end:
        if current.weekday() == 5:
            saturday = datetime.combine(current, datetime.min.time())
            fig.add_vrect(
                x0=saturday,
                x1=saturday + timedelta(days=2),
                fillcolor="rgba(128, 128, 128, 0.1)",
                layer="below",
                line_width=0,
            )
            current += timedelta(days=7)
        else:
            current += timedelta(days=1)


def create_empty_chart(message: str = "No data available") -> go.Figure:
    """Placeholder figure with a centered message."""
    fig = go.Figure()
    fig.add_annotation(text=message, x=0.5, y=0.5, xref='paper', yref='paper',
                       showarrow=False, font=dict(size=16, color='gray'))
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    return _base_layout(fig, None)


def create_price_chart(
    series: List[Dict[str, Any]],
    title: Optional[str] = None,
    currency_symbol: str = "$",
    show_weekend_shading: bool = False,
) -> go.Figure:
    """Area chart of Price over Date."""
    df = _series_frame(series, 'Price')
    if df.empty:
        return create_empty_chart()

    fig = go.Figure(go.Scatter(
        x=df['Date'],
        y=df['Price'],
        mode='lines',
        name='Price',
        line=dict(color=PRICE_COLOR, width=2),
        fill='tozeroy',
        fillcolor='rgba(59, 130, 246, 0.15)',
        hovertemplate=f'%{{x|%Y-%m-%d}}<br>Price: {currency_symbol}%{{y:,.2f}}<extra></extra>',
    ))
    fig.update_xaxes(tickformat='%b %d')
    fig.update_yaxes(tickprefix=currency_symbol, rangemode='normal')

    if show_weekend_shading:
        _add_weekend_shading(fig, df['Date'].min().to_pydatetime(), df['Date'].max().to_pydatetime())

    return _base_layout(fig, title)


def create_volume_chart(series: List[Dict[str, Any]], title: Optional[str] = None) -> go.Figure:
    """Bar chart of Volume over Date, labelled in millions."""
    df = _series_frame(series, 'Volume')
    if df.empty:
        return create_empty_chart()

    fig = go.Figure(go.Bar(
        x=df['Date'],
        y=df['Volume'],
        name='Volume',
        marker_color=VOLUME_COLOR,
        customdata=(df['Volume'] / 1e6).round(2),
        hovertemplate='%{x|%Y-%m-%d}<br>Volume: %{customdata:.2f}M<extra></extra>',
    ))
    fig.update_xaxes(tickformat='%b %d')
    fig.update_yaxes(tickformat='.2s')
    return _base_layout(fig, title)


def create_returns_chart(returns: List[Dict[str, Any]], title: Optional[str] = None) -> go.Figure:
    """Bar chart of Return by AssetID, one trace per period."""
    if not returns:
        return create_empty_chart()

    df = pd.DataFrame(returns)
    if 'AssetID' not in df.columns or 'Return' not in df.columns:
        return create_empty_chart()
    df['Return'] = pd.to_numeric(df['Return'], errors='coerce')

    fig = go.Figure()
    if 'Period' in df.columns:
        for i, (period, group) in enumerate(df.groupby('Period', sort=False)):
            fig.add_trace(go.Bar(
                x=group['AssetID'],
                y=group['Return'],
                name=str(period),
                marker_color=SERIES_COLORS[i % len(SERIES_COLORS)],
                hovertemplate='%{x}<br>Return: %{y:.2f}%<extra>' + str(period) + '</extra>',
            ))
        fig.update_layout(barmode='group')
    else:
        fig.add_trace(go.Bar(x=df['AssetID'], y=df['Return'], name='Return', marker_color=RETURNS_COLOR))

    fig.update_yaxes(ticksuffix='%')
    return _base_layout(fig, title)


def create_sheet_chart(
    chart_data: List[Dict[str, Any]],
    value_field: str,
    change_field: str = "",
    chart_type: str = "area",
    title: Optional[str] = None,
) -> Optional[go.Figure]:
    """Chart the value field (and change field, if any) across chart rows.

    Returns None when there is nothing to plot.
    """
    if not chart_data or not value_field:
        return None

    names = [row.get('name') for row in chart_data]
    fields = [value_field] + ([change_field] if change_field and change_field != value_field else [])
    # Non-numeric columns are left out of the chart rows
    fields = [f for f in fields if f in chart_data[0]]
    if not fields:
        return None

    fig = go.Figure()
    for i, field in enumerate(fields):
        color = SERIES_COLORS[i % len(SERIES_COLORS)]
        values = [row.get(field, 0) for row in chart_data]
        if chart_type == "bar":
            fig.add_trace(go.Bar(x=names, y=values, name=field, marker_color=color))
        elif chart_type == "line":
            fig.add_trace(go.Scatter(x=names, y=values, name=field, mode='lines+markers',
                                     line=dict(color=color, width=2), marker=dict(size=8)))
        else:
            fig.add_trace(go.Scatter(x=names, y=values, name=field, mode='lines',
                                     line=dict(color=color, width=2), fill='tozeroy'))

    return _base_layout(fig, title)
