from .http_files import HttpFileSource
from .local_files import LocalFileSource


def make_source(settings):
    if settings.base_url:
        return HttpFileSource(
            settings.base_url,
            timeout=settings.timeout,
            retry_attempts=settings.retry_attempts,
        )
    return LocalFileSource(settings.data_dir)


__all__ = [
    "HttpFileSource",
    "LocalFileSource",
    "make_source",
]
