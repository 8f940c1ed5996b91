"""Word validation and scoring for boggle-style letter grids."""

__version__ = "0.1.0"
