"""Collect transfer statistics for a few HTTP requests made with httpx.

Run with:
    python examples/httpx_client.py https://example.com
"""

import logging
import sys

import httpx

from transferstats import (
    HttpxTransferInfo,
    IdentityMetadata,
    InMemoryMetricSink,
    QueryError,
    StatsDispatcher,
    TransferTrace,
    selection_from_config,
)

logger = logging.getLogger(__name__)

# As a config parser would hand it over; names match case-insensitively
STATISTICS = {
    "Total_Time": "true",
    "Connect_Time": "true",
    "StartTransfer_Time": "true",
    "Size_Download": "true",
    "Speed_Download": "true",
    "Header_Size": "true",
    "Redirect_Count": "true",
    "Num_Connects": "true",
}


def main(urls: list[str]) -> None:
    logging.basicConfig(level=logging.DEBUG)
    selection = selection_from_config(STATISTICS)
    sink = InMemoryMetricSink()
    dispatcher = StatsDispatcher(selection, sink)

    with httpx.Client(follow_redirects=True) as client:
        for index, url in enumerate(urls):
            trace = TransferTrace()
            response = client.get(url, extensions={"trace": trace})
            dispatcher.identity = IdentityMetadata(
                plugin="curl",
                plugin_instance=str(index),
                type_instance_prefix="example_",
            )
            try:
                dispatcher.dispatch(HttpxTransferInfo.from_response(response))
            except QueryError:
                logger.exception("Could not read statistics for %s", url)

    for record in sink.records():
        print(
            f"{record.host}/{record.plugin}-{record.plugin_instance}/"
            f"{record.type}-{record.type_instance} = {record.value:g}"
        )


if __name__ == "__main__":
    main(sys.argv[1:] or ["https://example.com"])
