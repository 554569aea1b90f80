from booknest.client.api import BookNestAPI
from booknest.client.storage import LocalStorage
from booknest.client.store import AppState, AppStore

__all__ = ["AppState", "AppStore", "BookNestAPI", "LocalStorage"]
