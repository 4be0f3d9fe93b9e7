import os

from wigle_nodes.schema import NodeSpec, AuthSpec, IOField, ImplOpenAPI, ImplPython
from wigle_nodes.plugins.wigle.credentials import WIGLE_API

GEO = {"filter_geo": [True]}
LOCATION = {"filter_location": [True]}

WIGLE_NODE = NodeSpec(
    name="wigle.search",
    version="1.0.0",
    title="WiGLE",
    category="WiGLE",
    doc="Search wifi networks on wigle.net by SSID, BSSID, geolocation or address",
    auth=AuthSpec(
        type="basic",
        provider="wigle",
        credential=WIGLE_API.name,
        required=True,
        tested_by="wigle_nodes.plugins.wigle.connection_test:run",
    ),
    inputs={
        "operation": IOField(
            type="options",
            display_name="Operation",
            required=True,
            options=["search_network"],
            default="search_network",
            description="Search wifi network (using wigle.net)",
        ),
        "query_ssid": IOField(
            display_name="Search by SSID",
            default="LIVEBOX",
            description="Add a filter on SSID (% _ supported)",
        ),
        "query_bssid": IOField(
            display_name="Search by BSSID",
            default="",
            description="Add a filter on BSSID (eg 0A:2C:EF)",
        ),
        "filter_geo": IOField(
            type="boolean",
            display_name="Filter By Geo",
            default=False,
            description="Add a filter by geolocation",
        ),
        "query_lat": IOField(type="number", display_name="Latitude", default=0, show_when=GEO),
        "query_lon": IOField(type="number", display_name="Longitude", default=0, show_when=GEO),
        "query_radius": IOField(type="number", display_name="Radius (Km)", default=0.1, show_when=GEO),
        "filter_location": IOField(
            type="boolean",
            display_name="Filter By Location",
            default=False,
            description="Add a filter by postal address",
        ),
        "query_road": IOField(display_name="Road", default="", show_when=LOCATION),
        "query_city": IOField(display_name="City", default="", show_when=LOCATION),
        "query_region": IOField(display_name="Region", default="", show_when=LOCATION),
        "query_postalcode": IOField(display_name="Postal Code", default="", show_when=LOCATION),
        "query_country": IOField(display_name="Country", default="", show_when=LOCATION),
        "options": IOField(
            type="collection",
            display_name="Options",
            properties={
                "results_per_page": IOField(
                    type="number",
                    display_name="Results per Page",
                    default=25,
                    description="The number of results per page",
                ),
                "results_field": IOField(
                    display_name="Put Results in Field",
                    default="wigle",
                    description="The name of the output field to put the data in",
                ),
            },
        ),
    },
    outputs={
        "items": IOField(type="array", description="Input items with the search results added"),
    },
    impl=ImplPython(module="wigle_nodes.plugins.wigle.search_network"),
)


def api_operation(operation_id: str, title: str) -> NodeSpec:
    """A one-off node sending a single WiGLE API operation with this node's auth.

    ``WIGLE_BASE_URL`` replaces the server URL of the bundled OpenAPI document.
    """
    return NodeSpec(
        name=operation_id,
        title=title,
        category=WIGLE_NODE.category,
        auth=WIGLE_NODE.auth,
        impl=ImplOpenAPI(openapi_provider="wigle", operation_id=operation_id, base_url=os.getenv("WIGLE_BASE_URL") or None),
    )
