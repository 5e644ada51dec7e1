"""Reward table loading - pity weapon weights read once at startup.

The table is a CSV with one row per reward candidate:

    name, config_key, spawn_reference, weight, description

Row order is selection order. Built-in rewards missing from the file, or
whose weight is blank/unparsable, fall back to their defaults, and the
completed table is written back so the file always lists every setting.
Rows for extra rewards added by an operator are kept as long as they carry
a spawn reference and a weight.
"""

import logging
from collections import OrderedDict
from pathlib import Path
from typing import Dict, Optional

import pandas as pd

from src.last_stand.config import (
    DEFAULT_REWARDS,
    REWARD_CONFIG_COLUMNS,
    REWARD_CONFIG_FILE,
)

logger = logging.getLogger(__name__)

_REQUIRED_COLUMNS = {"name", "spawn_reference", "weight"}


class RewardConfigError(Exception):
    """Raised when the reward table cannot be turned into candidates."""


def default_reward_frame() -> pd.DataFrame:
    """The built-in reward table as a DataFrame."""
    rows = [
        {
            "name": name,
            "config_key": key,
            "spawn_reference": ref,
            "weight": weight,
            "description": f"Probability between 0 and 1 of spawning a {name.lower()}",
        }
        for name, key, ref, weight in DEFAULT_REWARDS
    ]
    return pd.DataFrame(rows, columns=REWARD_CONFIG_COLUMNS)


class RewardConfigLoader:
    """Reads the reward table and materializes missing defaults."""

    def __init__(self, config_file: Optional[Path] = None):
        self.config_file = Path(config_file or REWARD_CONFIG_FILE)

    def load(self) -> "OrderedDict[str, Dict]":
        """Load the reward table.

        Returns:
            Ordered mapping of reward name to
            {"spawn_reference": str, "weight": float}.

        Raises:
            RewardConfigError: If the file is malformed or a weight is negative.
        """
        if not self.config_file.exists():
            logger.info("No reward config at %s; writing defaults", self.config_file)
            df = default_reward_frame()
            self._write(df)
            return self._to_mapping(df)

        df = self._read()
        df, materialized = self._apply_defaults(df)
        self._validate(df)

        if materialized:
            logger.info(
                "Materialized %d default reward setting(s) into %s",
                materialized,
                self.config_file.name,
            )
            self._write(df)

        return self._to_mapping(df)

    def _read(self) -> pd.DataFrame:
        logger.info("Reading reward config: %s", self.config_file)
        try:
            df = pd.read_csv(self.config_file, dtype={"name": str, "spawn_reference": str})
        except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise RewardConfigError(f"Cannot parse {self.config_file}: {e}") from e

        missing = _REQUIRED_COLUMNS - set(df.columns)
        if missing:
            raise RewardConfigError(
                f"Reward config {self.config_file} missing columns: {sorted(missing)}"
            )

        # Text columns stay object so blank cells can be filled with strings
        for col in REWARD_CONFIG_COLUMNS:
            if col not in df.columns:
                df[col] = None
            if col != "weight":
                df[col] = df[col].astype(object)

        df["name"] = df["name"].map(lambda v: v.strip() if isinstance(v, str) else v)
        df = df.dropna(subset=["name"])
        df = df[df["name"] != ""]

        duplicated = df["name"].duplicated()
        if duplicated.any():
            logger.warning(
                "Ignoring duplicate reward rows: %s", df.loc[duplicated, "name"].tolist()
            )
            df = df[~duplicated]

        df = df[REWARD_CONFIG_COLUMNS].reset_index(drop=True).copy()
        df["weight"] = pd.to_numeric(df["weight"], errors="coerce").astype(float)
        return df

    def _apply_defaults(self, df: pd.DataFrame):
        """Fill blank built-in settings and append missing built-in rows.

        Returns:
            (completed DataFrame, number of settings materialized)
        """
        defaults = default_reward_frame().set_index("name")
        materialized = 0

        known = df["name"].isin(defaults.index)
        for col in ("config_key", "spawn_reference", "weight", "description"):
            blank = known & df[col].isna()
            if blank.any():
                df.loc[blank, col] = df.loc[blank, "name"].map(defaults[col])
                if col == "weight":
                    materialized += int(blank.sum())

        absent = defaults.index.difference(df["name"], sort=False)
        if len(absent):
            extra = defaults.loc[absent].reset_index()
            df = pd.concat([df, extra[REWARD_CONFIG_COLUMNS]], ignore_index=True)
            materialized += len(absent)

        df["weight"] = df["weight"].astype(float)
        return df, materialized

    def _validate(self, df: pd.DataFrame) -> None:
        no_weight = df["weight"].isna()
        if no_weight.any():
            raise RewardConfigError(
                f"Rewards without a weight: {df.loc[no_weight, 'name'].tolist()}"
            )

        no_ref = df["spawn_reference"].isna()
        if no_ref.any():
            raise RewardConfigError(
                f"Rewards without a spawn reference: {df.loc[no_ref, 'name'].tolist()}"
            )

        infinite = df["weight"].isin([float("inf"), float("-inf")])
        if infinite.any():
            raise RewardConfigError(
                f"Reward weights must be finite: {df.loc[infinite, 'name'].tolist()}"
            )

        negative = df["weight"] < 0
        if negative.any():
            raise RewardConfigError(
                f"Reward weights must be non-negative: {df.loc[negative, 'name'].tolist()}"
            )

        if df["weight"].sum() <= 0:
            logger.warning("Every reward weight is 0; no pity weapon can be granted")

    def _write(self, df: pd.DataFrame) -> None:
        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(self.config_file, index=False)

    @staticmethod
    def _to_mapping(df: pd.DataFrame) -> "OrderedDict[str, Dict]":
        rewards = OrderedDict()
        for _, row in df.iterrows():
            rewards[row["name"]] = {
                "spawn_reference": str(row["spawn_reference"]),
                "weight": float(row["weight"]),
            }
        logger.info("Loaded %d reward candidates", len(rewards))
        return rewards
