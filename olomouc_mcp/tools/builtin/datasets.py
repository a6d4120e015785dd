"""Dataset catalog tool: open datasets of the Olomouc Region."""
import logging

from ..registry import register_tool, ToolAnnotations, ToolParam, ToolResult

logger = logging.getLogger(__name__)

_DATASETS_SQL = """
    SELECT *
    FROM public."collections-cleaned"
    ORDER BY "title" ASC
    LIMIT :limit
"""

# column → label, in display order; empty values are skipped
_FIELDS = (
    ("title", "Title"),
    ("type", "Type"),
    ("description", "Description"),
    ("url", "URL"),
    ("owner", "Owner"),
    ("source", "Source"),
    ("categories", "Categories"),
    ("tags", "Tags"),
    ("access", "Access"),
    ("fields", "Field Definitions"),
    ("sample_data", "Sample Data"),
)


def format_dataset(index: int, row: dict) -> str:
    lines = [f"Dataset #{index}:"]
    for column, label in _FIELDS:
        value = row.get(column)
        if value:
            lines.append(f"  {label}: {value}")
    return "\n".join(lines) + "\n"


@register_tool(
    "list_olomouc_datasets",
    description=(
        "Retrieves a list of open datasets from the Olomouc Region (Olomoucký kraj) database, sorted "
        "alphabetically by title. Each dataset includes comprehensive metadata such as title, type, "
        "description, URL, owner, source, categories, tags, access information, field definitions, and "
        "sample data. This tool is useful for discovering available datasets, browsing data resources, and "
        "understanding what information is publicly available for the Olomouc region."
    ),
    params=[
        ToolParam("limit", type="integer",
                  description="Maximum number of datasets to return. Must be a positive integer. Default is 50.",
                  required=False, default=50),
    ],
    annotations=ToolAnnotations(title="Olomouc Datasets List Tool"),
)
async def list_datasets(ctx, limit: int = 50, **kwargs) -> ToolResult:
    limit = max(limit, 1)
    rows = await ctx.db.query(_DATASETS_SQL, {"limit": limit})

    if not rows:
        return ToolResult(type="text", text="No datasets found in the collections-cleaned table.")

    blocks = [f"Found {len(rows)} dataset(s) from Olomouc Region:\n"]
    blocks.extend(format_dataset(i, row) for i, row in enumerate(rows, 1))
    return ToolResult(type="text", text="\n".join(blocks))
