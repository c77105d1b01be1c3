from django.core.files.storage import storages


class PrivateStorage:
    """
    Callable storage for documents that must not be publicly readable
    (certificates, pitch decks). Resolves to the "private" entry of
    settings.STORAGES.
    """
    def __new__(cls, *args, **kwargs):
        return storages["private"]
