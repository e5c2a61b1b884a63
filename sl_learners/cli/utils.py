"""
CLI Utilities - Shared functions for CLI commands.
"""
from pathlib import Path
from typing import List, Optional, Tuple

import pandas as pd
from rich.console import Console

console = Console()


def show_error(message: str) -> None:
    """Display error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def show_success(message: str) -> None:
    """Display success message."""
    console.print(f"[bold green]✓[/bold green] {message}")


def show_info(message: str) -> None:
    """Display info message."""
    console.print(f"[bold blue]ℹ[/bold blue] {message}")


def read_training_csv(
    path: Path,
    outcome: str,
    weights: Optional[str] = None,
    id_column: Optional[str] = None,
) -> Tuple[pd.Series, pd.DataFrame, Optional[pd.Series], Optional[pd.Series]]:
    """
    Split a training CSV into outcome, covariates, weights and ids.

    Raises:
        ValueError: If a named column is missing
    """
    frame = pd.read_csv(path)
    reserved: List[str] = [outcome]
    for column in (weights, id_column):
        if column is not None:
            reserved.append(column)

    missing = [column for column in reserved if column not in frame.columns]
    if missing:
        raise ValueError(f"Columns not found in {path}: {missing}")

    X = frame.drop(columns=reserved)
    y = frame[outcome]
    w = frame[weights] if weights is not None else None
    ids = frame[id_column] if id_column is not None else None
    return y, X, w, ids


def read_prediction_csv(path: Path, columns: pd.Index) -> pd.DataFrame:
    """Read prediction rows, keeping the training covariate columns in order."""
    frame = pd.read_csv(path)
    missing = [column for column in columns if column not in frame.columns]
    if missing:
        raise ValueError(f"Columns not found in {path}: {missing}")
    return frame[list(columns)]
