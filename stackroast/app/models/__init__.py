from stackroast.app.models.stack import Stack
from stackroast.app.models.roast import ROAST_TYPES, Roast
from stackroast.app.models.vote import VOTE_TYPES, Vote

__all__ = [
    "Stack",
    "Roast",
    "Vote",
    "ROAST_TYPES",
    "VOTE_TYPES",
]
