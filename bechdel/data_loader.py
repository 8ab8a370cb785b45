"""
Data loading and cleaning module.
Handles loading the movie table from CSV, dropping non-analytical columns and incomplete rows.
"""

# Standard libs for typing and paths
from typing import Iterable, List, Optional  # type hints
from pathlib import Path  # filesystem-safe paths

# Tabular data handling
import pandas as pd  # DataFrame operations

# Console logging
from loguru import logger  # console logger

from .config import DEFAULT_DROP_COLUMNS  # default non-analytical columns


class MovieLoader:
	"""
	Handles loading and cleaning of the movie table.
	"""

	def __init__(self, drop_columns: Optional[Iterable[str]] = None):
		"""Initialize the loader with the columns to discard during cleaning."""
		self.drop_columns: List[str] = list(drop_columns) if drop_columns is not None else list(DEFAULT_DROP_COLUMNS)

	def load_csv(self, filepath: str) -> pd.DataFrame:
		"""
		Load a comma-separated movie table.
		A missing file is fatal; parser errors from pandas propagate unchanged.
		"""
		filepath = Path(filepath)  # normalize path

		# Validate the file presence early to give clear error messages
		if not filepath.exists():
			raise FileNotFoundError(f"Movie data file not found: {filepath}")

		logger.info(f"[Loader] Loading movies from {filepath}...")  # log action
		frame = pd.read_csv(filepath, encoding='utf-8')  # read whole table
		logger.info(f"[Loader] Loaded {len(frame)} rows with {len(frame.columns)} columns.")  # summary
		return frame

	def clean(self, frame: pd.DataFrame) -> pd.DataFrame:
		"""
		Drop the configured columns and every row with a missing value in what remains.
		The returned index is a fresh 0..n-1 range that serves as the movie id.
		"""
		# Only drop what is actually present so partial schemas still load
		present = [c for c in self.drop_columns if c in frame.columns]
		if present:
			logger.info(f"[Loader] Dropping {len(present)} columns: {present}")
		cleaned = frame.drop(columns=present)

		before = len(cleaned)
		cleaned = cleaned.dropna(how='any').reset_index(drop=True)  # dense table only
		dropped = before - len(cleaned)
		logger.info(f"[Loader] Dropped {dropped} incomplete rows; {len(cleaned)} rows remain.")
		return cleaned


def coerce_gross(series: pd.Series) -> pd.Series:
	"""
	Convert a gross column to floats.
	Currency symbols and thousands separators are stripped; anything else non-numeric becomes NaN.
	"""
	text = series.astype(str).str.replace(r'[$,\s]', '', regex=True)  # "$1,234" -> "1234"
	return pd.to_numeric(text, errors='coerce').astype('float64')
