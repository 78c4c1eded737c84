from lsp_launch.observability import log_event


def log_unknown_variant(tag: str, source: str) -> None:
    log_event(
        {
            "kind": "unknown_variant_tag",
            "level": "warning",
            "tag": tag,
            "source": source,
        }
    )


def log_entry_dropped(
    index: int,
    tag: str,
    values: list[str],
) -> None:
    log_event(
        {
            "kind": "entry_dropped",
            "level": "debug",
            "index": index,
            "tag": tag,
            "values": values,
        }
    )


def log_definitions_committed(
    previous_count: int,
    committed_count: int,
    dropped_count: int,
) -> None:
    log_event(
        {
            "kind": "definitions_committed",
            "level": "info",
            "previous_count": previous_count,
            "committed_count": committed_count,
            "dropped_count": dropped_count,
        }
    )


def log_store_error(
    path: str,
    error: str,
    error_type: str,
) -> None:
    log_event(
        {
            "kind": "store_error",
            "level": "error",
            "path": path,
            "error": error,
            "error_type": error_type,
        }
    )
