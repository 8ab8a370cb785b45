"""
Configuration for the analysis pipeline.
Paths, column names and thresholds live in one validated object so scripts and tests share defaults.
"""

from pathlib import Path
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from loguru import logger


# Columns of the raw movie table that carry no analytical value
DEFAULT_DROP_COLUMNS = [
	'imdb', 'test', 'budget', 'domgross', 'code',
	'budget_2013$', 'domgross_2013$', 'intgross_2013$',
	'period code', 'decade code',
	'Rated', 'Released', 'Runtime', 'Director', 'Writer', 'Actors',
	'Language', 'Country', 'Awards', 'Poster', 'Metascore', 'imdbRating',
	'imdbVotes', 'imdbID', 'Type', 'Response', 'Website', 'DVD',
	'BoxOffice', 'Production', 'Error',
]

# Genres shown in the genre-by-outcome chart
DEFAULT_DISPLAY_GENRES = ['Action', 'Adventure', 'Comedy', 'Crime', 'Drama', 'Horror', 'Romance']

# Adjective/noun runs optionally extended by preposition + determiner groups, ending in a noun
DEFAULT_PHRASE_PATTERN = r'(A|N)*N(P+D*(A|N)*N)*'


class AnalysisConfig(BaseModel):
	model_config = ConfigDict(extra='forbid')

	movies_path: Path = Path('data') / 'movies.csv'
	ratings_path: Optional[Path] = Path('data') / 'bechdeltest.csv'
	figures_dir: Path = Path('outputs') / 'figures'

	drop_columns: List[str] = Field(default_factory=lambda: list(DEFAULT_DROP_COLUMNS))
	title_column: str = 'title'
	year_column: str = 'year'
	label_column: str = 'clean_test'
	binary_column: str = 'binary'
	gross_column: str = 'intgross'
	genre_column: str = 'Genre'
	plot_column: str = 'Plot'
	genre_delimiter: str = ','
	display_genres: List[str] = Field(default_factory=lambda: list(DEFAULT_DISPLAY_GENRES))

	# Secondary table used for reconciliation
	second_rating_column: str = 'rating'
	near_miss_cutoff: float = 90.0

	top_n: int = Field(80, gt=0)
	top_k: int = Field(20, gt=0)
	on_unknown_outcome: Literal['raise', 'tag'] = 'raise'

	language: str = 'en'
	relevant_upos: List[str] = Field(default_factory=lambda: ['NOUN', 'ADJ'])
	phrase_pattern: str = DEFAULT_PHRASE_PATTERN
	phrase_min_ngram: int = 1
	phrase_min_freq: int = 3
	rake_ngram_max: int = Field(2, gt=0)
	rake_min_freq: int = Field(2, gt=0)

	@field_validator('genre_delimiter')
	@classmethod
	def _delimiter_not_empty(cls, value: str) -> str:
		if not value:
			raise ValueError('genre_delimiter cannot be empty')
		return value


def load_config(path: Optional[Union[str, Path]] = None) -> AnalysisConfig:
	"""
	Load an AnalysisConfig from a JSON file, or return defaults when no path is given.
	Unknown keys and invalid values raise pydantic's ValidationError.
	"""
	if path is None:
		return AnalysisConfig()
	path = Path(path)
	if not path.exists():
		raise FileNotFoundError(f"Config file not found: {path}")
	logger.info(f"[Config] Loading configuration from {path}")
	return AnalysisConfig.model_validate_json(path.read_text(encoding='utf-8'))
