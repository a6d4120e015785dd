"""UUID tool — RFC 4122 version 4 identifiers from the random source."""
from ..registry import register_tool, ToolAnnotations, ToolParam, ToolResult

MAX_UUIDS = 10


def uuid4_from_bytes(data: bytes) -> str:
    if len(data) != 16:
        raise ValueError("UUID needs exactly 16 random bytes")
    raw = bytearray(data)
    raw[6] = (raw[6] & 0x0F) | 0x40  # version 4
    raw[8] = (raw[8] & 0x3F) | 0x80  # variant 10
    h = raw.hex()
    return f"{h[:8]}-{h[8:12]}-{h[12:16]}-{h[16:20]}-{h[20:]}"


@register_tool(
    "generate-uuid",
    description="Generates a random UUID (version 4)",
    params=[
        ToolParam("count", type="integer", description="Number of UUIDs to generate (1-10)",
                  required=False, default=1),
    ],
    annotations=ToolAnnotations(title="UUID Generator", idempotent=False),
)
async def generate_uuid(ctx, count: int = 1, **kwargs) -> ToolResult:
    count = max(1, min(MAX_UUIDS, count))
    uuids = [uuid4_from_bytes(ctx.random.bytes(16)) for _ in range(count)]
    return ToolResult(type="text", text="\n".join(uuids))
