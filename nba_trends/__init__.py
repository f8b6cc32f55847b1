"""NBA Trends - scraped player and team season datasets with team trend fits."""

__version__ = "0.1.0"
