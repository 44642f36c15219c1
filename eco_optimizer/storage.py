import uuid


class ResultStore:
    """In-memory store of optimization summaries keyed by request id. Nothing is evicted."""

    def __init__(self):
        self._results = {}

    def store(self, summary, result_id=None):
        if result_id is None:
            result_id = uuid.uuid4().hex
        self._results[result_id] = summary
        return result_id

    def get(self, result_id):
        return self._results.get(result_id)

    def __len__(self):
        return len(self._results)
