from wigle_nodes.schema import CredentialSpec, IOField

WIGLE_API = CredentialSpec(
    name="wigleApi",
    display_name="WiGLE API",
    properties={
        "api_key": IOField(
            type="string",
            display_name="Api Key",
            default="",
            secret=True,
            description='The "Encoded for use" token from your WiGLE account page',
        ),
    },
)
