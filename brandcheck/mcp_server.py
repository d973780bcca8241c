"""brandcheck MCP Server: expose the compliance check as tools for any MCP-capable agent.

Run:
    python -m brandcheck.mcp_server

Or add to your MCP config (e.g., Claude Desktop, Cursor):
    {
      "mcpServers": {
        "brandcheck": {
          "command": "python",
          "args": ["-m", "brandcheck.mcp_server"],
          "env": {
            "BRANDCHECK_LLM_API_KEY": "your-key",
            "BRANDCHECK_LLM_BASE_URL": "https://generativelanguage.googleapis.com/v1beta/openai/",
            "BRANDCHECK_LLM_MODEL": "gemini-2.0-flash",
            "EXA_API_KEY": "your-exa-key"
          }
        }
      }
    }
"""

from mcp.server.fastmcp import FastMCP

mcp = FastMCP("brandcheck")


@mcp.tool()
async def check_video_compliance(
    video: str,
    guidelines: str,
    brand_name: str = "",
    check_contextual_risks: bool = True,
    depth: int = 1,
) -> str:
    """Check a video against brand guidelines and recent contextual risks.

    Returns a text report:
      depth=0  headline with issue counts
      depth=1  every technical issue and contextual risk (default)
      depth=2  adds the video summary and risk sources

    Args:
        video: Video URL, data URI or local file path
        guidelines: The brand guidelines to check against
        brand_name: Brand to search recent news for (needed for contextual risks)
        check_contextual_risks: Search recent news for risks related to the video
        depth: Detail level 0-2
    """
    from .pipeline import check_compliance
    from .renderer import render_report
    from .schemas import ComplianceRequest

    request = ComplianceRequest(
        video=video,
        guidelines=guidelines,
        brand_name=brand_name,
        enable_sensitive_topics_check=check_contextual_risks and bool(brand_name),
    )
    report = await check_compliance(request)
    return render_report(report, depth=depth)


@mcp.tool()
def contextual_risk_queries(
    brand_name: str,
    main_topics: list[str],
    visual_elements: list[str] | None = None,
    cultural_elements: list[str] | None = None,
    tone: str = "",
) -> str:
    """List the news searches a contextual risk check would run.

    Useful to preview what will be searched before running a full check.

    Args:
        brand_name: Brand name
        main_topics: Main topics of the video
        visual_elements: Notable visual elements
        cultural_elements: Cultural references in the video
        tone: Overall tone of the video
    """
    from .queries import generate_queries
    from .schemas import VideoSummary

    summary = VideoSummary(
        main_topics=main_topics,
        visual_elements=visual_elements or [],
        cultural_elements=cultural_elements or [],
        tone=tone,
    )
    queries = generate_queries(brand_name, summary)
    return "\n".join(f"{i}. {q}" for i, q in enumerate(queries, 1))


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
