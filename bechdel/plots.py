"""
Chart rendering for the analysis.
Presentation only: every function takes an already-computed table and writes one PNG.
"""

from pathlib import Path
from typing import Dict

import numpy as np
import pandas as pd
import matplotlib
matplotlib.use('Agg')  # headless rendering
import matplotlib.pyplot as plt

from loguru import logger

from .models import PASS, FAIL
from .ratings import LEVELS, UNKNOWN_LEVEL

# Legend colours per rating level; carries no analytical meaning
LEVEL_COLORS: Dict[str, str] = dict(zip(LEVELS + [UNKNOWN_LEVEL], ['#9e9e9e', '#d7191c', '#fdae61', '#abd9e9', '#2c7bb6', '#000000']))
OUTCOME_COLORS: Dict[str, str] = {PASS: '#2c7bb6', FAIL: '#d7191c'}


def _save(fig, outdir: Path, name: str) -> Path:
	outdir = Path(outdir)
	outdir.mkdir(parents=True, exist_ok=True)
	path = outdir / name
	fig.tight_layout()
	fig.savefig(path, dpi=150)
	plt.close(fig)
	logger.info(f"[Plots] Saved {path}")
	return path


def plot_yearly_pass_share(yearly: pd.DataFrame, outdir: Path) -> Path:
	fig, ax = plt.subplots(figsize=(10, 5))
	ax.plot(yearly.index, yearly['pass_share'], marker='o', color=OUTCOME_COLORS[PASS])
	ax.set_xlabel('Year')
	ax.set_ylabel('Share of movies passing')
	ax.set_ylim(0, 1)
	ax.set_title('Bechdel Test pass rate by year')
	ax.grid(True, linestyle='--', alpha=0.5)
	return _save(fig, outdir, 'yearly_pass_share.png')


def level_colors(levels: pd.Series) -> Dict[str, str]:
	"""Colour per level present in a movie table's 'level' column, in level order."""
	present = set(levels.dropna().astype(str))
	categories = levels.cat.categories if hasattr(levels, 'cat') else sorted(present)
	return {str(c): LEVEL_COLORS.get(str(c), '#000000') for c in categories if str(c) in present}


def plot_mean_gross_by_rating(means: pd.Series, levels: pd.Series, outdir: Path) -> Path:
	"""
	Bars per level of the movie table; levels without a mean (dubious, unknown) are skipped.
	means is indexed by rating, levels is the table's 'level' column.
	"""
	palette = level_colors(levels)
	by_level = {str(r): v for r, v in means.items()}
	shown = [level for level in palette if level in by_level]
	fig, ax = plt.subplots(figsize=(8, 5))
	ax.bar(shown, [by_level[level] / 1e6 for level in shown], color=[palette[level] for level in shown])
	ax.set_xlabel('Rating')
	ax.set_ylabel('Mean international gross (millions)')
	ax.set_title('Mean international gross by Bechdel rating')
	return _save(fig, outdir, 'mean_gross_by_rating.png')


def plot_gross_density(gross_by_outcome: Dict[str, pd.Series], outdir: Path, bins: int = 40) -> Path:
	"""Normalized histograms of log10 gross per binary outcome."""
	fig, ax = plt.subplots(figsize=(10, 5))
	for outcome, gross in gross_by_outcome.items():
		values = gross.dropna()
		values = np.log10(values[values > 0])
		if values.empty:
			continue
		ax.hist(values, bins=bins, density=True, histtype='step', linewidth=2,
			color=OUTCOME_COLORS.get(outcome), label=outcome)
	ax.set_xlabel('log10 international gross')
	ax.set_ylabel('Density')
	ax.set_title('International gross by Bechdel outcome')
	ax.legend()
	return _save(fig, outdir, 'gross_density.png')


def plot_genre_outcomes(counts: pd.DataFrame, outdir: Path) -> Path:
	"""Grouped bars of PASS/FAIL counts for the display genres."""
	wide = counts.pivot(index='genre', columns='binary', values='count').fillna(0)
	outcomes = [o for o in (PASS, FAIL) if o in wide.columns]
	x = np.arange(len(wide.index))
	width = 0.8 / max(1, len(outcomes))
	fig, ax = plt.subplots(figsize=(10, 5))
	for i, outcome in enumerate(outcomes):
		ax.bar(x + i * width, wide[outcome], width, label=outcome, color=OUTCOME_COLORS[outcome])
	ax.set_xticks(x + width * (len(outcomes) - 1) / 2)
	ax.set_xticklabels(wide.index, rotation=30, ha='right')
	ax.set_ylabel('Movies')
	ax.set_title('Bechdel outcome by genre')
	ax.legend()
	return _save(fig, outdir, 'genre_outcomes.png')


def plot_top_terms(table: pd.DataFrame, outdir: Path, name: str, title: str, value: str = 'freq') -> Path:
	subset = table.iloc[::-1]  # largest bar on top
	fig, ax = plt.subplots(figsize=(8, 0.35 * len(subset) + 2))
	ax.barh(subset[subset.columns[0]].astype(str), subset[value], color='#2c7bb6')
	ax.set_xlabel(value)
	ax.set_title(title)
	return _save(fig, outdir, name)
