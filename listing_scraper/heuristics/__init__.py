"""
Title, year, season and episode inference from paths and filenames.
"""

from .movie import MovieInfo, infer_movie_info
from .rules import ClassificationError
from .series import EpisodeInfo, infer_episode_info, is_season_folder

__all__ = [
    'ClassificationError',
    'EpisodeInfo',
    'MovieInfo',
    'infer_episode_info',
    'infer_movie_info',
    'is_season_folder',
]
