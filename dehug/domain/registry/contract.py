"""Registry contract surface used by the client."""

from dehug.domain.chain.abi import EventFragment, FunctionFragment

# Reads
GET_LATEST_CONTENT = FunctionFragment("getLatestContent", ("uint256",), ("uint256[]",))
GET_CONTENT = FunctionFragment(
    "getContent",
    ("uint256",),
    ("address", "uint8", "string", "string", "uint8", "uint256", "uint256", "uint256", "bool"),
)
GET_CONTENT_BATCH = FunctionFragment(
    "getContentBatch",
    ("uint256[]",),
    ("address[]", "uint8[]", "string[]", "string[]", "uint8[]", "uint256[]", "bool[]"),
)
URI = FunctionFragment("uri", ("uint256",), ("string",))
GET_LATEST_TOKEN_ID = FunctionFragment("getLatestTokenId", (), ("uint256",))
TOTAL_SUPPLY = FunctionFragment("totalSupply", (), ("uint256",))

# Writes
UPLOAD_CONTENT = FunctionFragment(
    "uploadContent",
    ("uint8", "string", "string", "string", "string", "string[]"),
    ("uint256",),
)
UPDATE_DOWNLOAD_COUNT = FunctionFragment("updateDownloadCount", ("uint256", "uint256"))

# Events
CONTENT_UPLOADED = EventFragment(
    "ContentUploaded",
    ("uint256", "address", "uint8", "string", "string"),
    data_types=("uint8", "string", "string"),
)
TRANSFER_SINGLE = EventFragment(
    "TransferSingle",
    ("address", "address", "address", "uint256", "uint256"),
    data_types=("uint256", "uint256"),
)

# topic0 the deployed registry emits for ContentUploaded. It does not match the
# hash of the declared signature above, so the primary-event lookup matches on
# this value (overridable through registry.content_uploaded_topic).
DEPLOYED_CONTENT_UPLOADED_TOPIC = (
    "0xaf9112b14cab444584e1c1760596128c324b98422facac9ee00a830d560bf775"
)
