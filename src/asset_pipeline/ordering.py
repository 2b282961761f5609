"""Processing order for a build.

References are resolved against the path table as it stands when the
referring file is processed, so referenced files must come first. Two tiers
cover every reference kind in use: images are only ever referenced, and the
service worker enumerates everyone else's public paths. Anything deeper
would need a real dependency graph.
"""

DEFAULT_IMAGES_DIR = "images"
DEFAULT_SERVICE_WORKER = "service-worker.js"


def order_key(
    path: str,
    images_dir: str = DEFAULT_IMAGES_DIR,
    service_worker: str = DEFAULT_SERVICE_WORKER,
) -> tuple[bool, bool, str]:
    """Sort key: images first, service worker last, otherwise by path."""
    return (
        not path.startswith(images_dir.rstrip("/") + "/"),
        path.endswith(service_worker),
        path,
    )


def build_order(
    files: list[str],
    images_dir: str = DEFAULT_IMAGES_DIR,
    service_worker: str = DEFAULT_SERVICE_WORKER,
) -> list[str]:
    """Return ``files`` in processing order.

    Example:
        >>> build_order(['service-worker.js', 'app.css', 'images/a.png'])
        ['images/a.png', 'app.css', 'service-worker.js']
    """
    return sorted(files, key=lambda path: order_key(path, images_dir, service_worker))
