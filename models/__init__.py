"""
Persistence package: the DBStorage singleton (durable store) and the
SearchIndex singleton (free-text index), shared by the API blueprints.
"""
from models.db_storage import DBStorage
from models.search_index import SearchIndex

storage = DBStorage()
storage.reload()

search_index = SearchIndex()
