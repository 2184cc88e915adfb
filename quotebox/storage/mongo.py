"""
MongoDB backend. Quotes are stored as {_id, text, source} documents in quotes.quotes
"""

from bson import ObjectId
from pymongo import MongoClient
from pymongo.collection import Collection

import logging
import random

from quotebox.storage.base import StorageDriver, Pagination, QuoteRecord
from quotebox.storage.errors import QuoteNotFound

log = logging.getLogger('quotebox')

DATABASE_NAME = 'quotes'
COLLECTION_NAME = 'quotes'

# Milliseconds
CONNECT_TIMEOUT = 2000
OPERATION_TIMEOUT = 5000


class MongoStorage(StorageDriver):
    def __init__(self, dsn: str, client: MongoClient = None):
        """
        :param dsn: A mongodb:// connection string
        :param client: An already connected client to use instead of creating one from the dsn
        """
        if client is None:
            client = MongoClient(
                dsn,
                connectTimeoutMS=CONNECT_TIMEOUT,
                serverSelectionTimeoutMS=CONNECT_TIMEOUT,
                timeoutMS=OPERATION_TIMEOUT,
            )

        self.client = client

    @property
    def collection(self) -> Collection:
        return self.client[DATABASE_NAME][COLLECTION_NAME]

    @staticmethod
    def _to_record(document: dict) -> QuoteRecord:
        return QuoteRecord(
            id=document['_id'],
            text=document.get('text', ''),
            source=document.get('source', '')
        )

    def get_quotes(self, pagination: Pagination) -> list[QuoteRecord]:
        cursor = self.collection.find({}, skip=pagination.offset, limit=pagination.size)
        return [self._to_record(doc) for doc in cursor]

    def count_quotes(self, text: str = '') -> int:
        query = {}

        if text:
            query['text'] = text

        return self.collection.count_documents(query)

    def add_quote(self, quote: QuoteRecord) -> QuoteRecord:
        res = self.collection.insert_one({
            '_id': ObjectId(),
            'text': quote.text,
            'source': quote.source
        })

        return QuoteRecord(id=res.inserted_id, text=quote.text, source=quote.source)

    def set_quotes(self, quotes: list[QuoteRecord]) -> list[QuoteRecord]:
        self.collection.delete_many({})

        # insert_many refuses an empty batch, the collection is simply left empty
        if not quotes:
            return []

        res = self.collection.insert_many([
            {'_id': ObjectId(), 'text': q.text, 'source': q.source}
            for q in quotes
        ])

        return [
            QuoteRecord(id=_id, text=q.text, source=q.source)
            for _id, q in zip(res.inserted_ids, quotes)
        ]

    def random_quote(self) -> QuoteRecord:
        count = self.collection.count_documents({})

        if count == 0:
            raise QuoteNotFound("quote not found")

        document = self.collection.find_one({}, skip=random.randrange(count))

        # Something got deleted between counting and fetching
        if document is None:
            raise QuoteNotFound("quote not found")

        return self._to_record(document)

    def close(self):
        log.debug('Closing MongoDB connection')
        self.client.close()
