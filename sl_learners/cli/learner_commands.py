"""
CLI Learner Commands - learners, fit, and superlearner commands.
"""
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
import typer
from rich.table import Table

from ..models import (
    Family,
    LearnerRegistry,
    SuperLearner,
    build_learner_config,
    save_fit,
)
from .utils import console, read_prediction_csv, read_training_csv, show_error, show_info, show_success


def _learner_config(
    name: str,
    seed: Optional[int],
    config_file: Optional[Path] = None,
) -> Dict[str, Any]:
    """YAML defaults for a learner plus the seed, when the learner takes one."""
    canonical = LearnerRegistry.get_metadata(name)["name"]
    overrides: Dict[str, Any] = {}
    if seed is not None and "random_state" in LearnerRegistry.create(canonical).config:
        overrides["random_state"] = seed
    return build_learner_config(canonical, overrides=overrides, config_file=config_file)


def _write_predictions(pred: Any, output: Optional[Path]) -> None:
    frame = pd.DataFrame({"pred": pred})
    if output is None:
        console.print(frame.to_string(index=False))
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(output, index=False)
    show_success(f"Wrote {len(frame)} predictions to {output}")


def learners_command() -> None:
    """
    List registered learners.

    Examples:
        sl-learners learners
    """
    table = Table(show_header=True, title="Registered Learners")
    table.add_column("Learner", style="cyan")
    table.add_column("Category", style="yellow")
    table.add_column("Aliases", style="green")
    table.add_column("Description")

    for name in LearnerRegistry.list_all():
        meta = LearnerRegistry.get_metadata(name)
        table.add_row(
            meta["name"],
            meta["category"],
            ", ".join(meta["aliases"]),
            meta["description"],
        )

    console.print(table)


def fit_command(
    data: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        help="Training CSV with outcome and covariate columns"
    ),
    outcome: str = typer.Option(
        ...,
        "--outcome",
        "-y",
        help="Outcome column name"
    ),
    family: str = typer.Option(
        "gaussian",
        "--family",
        "-f",
        help="gaussian (regression) or binomial (binary classification)"
    ),
    learner: str = typer.Option(
        "extra_trees",
        "--learner",
        "-l",
        help="Registered learner name"
    ),
    weights: Optional[str] = typer.Option(
        None,
        "--weights",
        help="Observation weight column"
    ),
    predict: Optional[Path] = typer.Option(
        None,
        "--predict",
        exists=True,
        dir_okay=False,
        help="CSV of rows to predict (defaults to the training rows)"
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        help="YAML file with learner hyperparameters"
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Random seed for the learner"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write predictions to this CSV instead of the console"
    ),
    save: Optional[Path] = typer.Option(
        None,
        "--save",
        help="Save the fitted learner (joblib) to this path"
    ),
) -> None:
    """
    Fit one learner on a CSV and write its predictions.

    Examples:
        sl-learners fit train.csv --outcome medv
        sl-learners fit train.csv -y churn -f binomial --predict new.csv -o pred.csv
    """
    try:
        resolved_family = Family.resolve(family)
        y, X, w, _ = read_training_csv(data, outcome, weights=weights)
        new_x = read_prediction_csv(predict, X.columns) if predict is not None else None

        config = _learner_config(learner, seed, config_file)
        model = LearnerRegistry.create(learner, config=config)
        show_info(f"Fitting {model.name} ({resolved_family}) on {len(X)} rows")

        result = model.fit(y, X, new_x=new_x, family=resolved_family, obs_weights=w)
        show_info(f"Predicted {result.n_samples} rows")

        if save is not None:
            save_fit(result.fit, save)
            show_success(f"Saved fit to {save}")

        _write_predictions(result.pred, output)
    except Exception as e:
        show_error(str(e))
        raise typer.Exit(1)


def superlearner_command(
    data: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        help="Training CSV with outcome and covariate columns"
    ),
    outcome: str = typer.Option(
        ...,
        "--outcome",
        "-y",
        help="Outcome column name"
    ),
    family: str = typer.Option(
        "gaussian",
        "--family",
        "-f",
        help="gaussian (regression) or binomial (binary classification)"
    ),
    library: List[str] = typer.Option(
        ["mean", "extra_trees"],
        "--library",
        "-L",
        help="Learner to include (repeatable)"
    ),
    folds: int = typer.Option(
        10,
        "--folds",
        "-V",
        help="Number of cross-validation folds"
    ),
    weights: Optional[str] = typer.Option(
        None,
        "--weights",
        help="Observation weight column"
    ),
    id_column: Optional[str] = typer.Option(
        None,
        "--id",
        help="Grouping id column; rows sharing an id stay in one fold"
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Random seed for fold assignment and learners"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write predictions to this CSV instead of the console"
    ),
) -> None:
    """
    Fit a cross-validated super learner and report risk and weights.

    Examples:
        sl-learners superlearner train.csv --outcome medv -V 5
        sl-learners superlearner train.csv -y churn -f binomial -L mean -L extra_trees
    """
    try:
        resolved_family = Family.resolve(family)
        y, X, w, ids = read_training_csv(data, outcome, weights=weights, id_column=id_column)

        sl = SuperLearner(config={
            "library": library,
            "learner_configs": {name: _learner_config(name, seed) for name in library},
            "cv_folds": folds,
            "random_state": seed,
        })
        show_info(f"Fitting super learner ({resolved_family}) with {folds} folds on {len(X)} rows")
        result = sl.fit(y, X, family=resolved_family, obs_weights=w, id=ids)
    except Exception as e:
        show_error(str(e))
        raise typer.Exit(1)

    table = Table(show_header=True, title="Super Learner")
    table.add_column("Learner", style="cyan")
    table.add_column("CV Risk", style="yellow")
    table.add_column("Coef", style="green")
    for name, risk, coef in zip(result.library, result.cv_risk, result.coef):
        table.add_row(name, f"{risk:.4f}", f"{coef:.4f}")
    console.print(table)

    if output is not None:
        try:
            _write_predictions(result.pred, output)
        except Exception as e:
            show_error(str(e))
            raise typer.Exit(1)
