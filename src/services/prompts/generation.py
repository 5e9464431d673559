"""Content generation prompt templates.

Contains prompts for:
- TITLE_GENERATOR_V1: Viral YouTube titles for a topic
- HASHTAG_GENERATOR_V1: Trending hashtags for a topic and niche
- TAG_GENERATOR_V1: Search tags from a title and description
- DESCRIPTION_GENERATOR_V1: Full video description from a title
"""

# Title Generator v1 prompt
# Template placeholders: {count}, {subject}
TITLE_GENERATOR_V1 = """Create {count} viral YouTube titles for: "{subject}"

RULES
- 40-70 characters each
- Use viral patterns: POV, "I tried X", numbers, questions, "Why X", "What happens when"
- Add relevant emojis
- Make them click-worthy and trending
- Each title must be unique

OUTPUT
Return only a JSON string array: ["title1", "title2", "title3"]"""

# Hashtag Generator v1 prompt
# Template placeholders: {count}, {subject}, {niche}
HASHTAG_GENERATOR_V1 = """Generate {count} trending YouTube hashtags for: "{subject}"
Niche: {niche}

RULES
- Mix broad and specific hashtags
- Avoid generic ones like #video or #youtube
- Format every entry as #hashtag (no spaces)

OUTPUT
Return only a JSON string array: ["#tag1", "#tag2", "#tag3"]"""

# Tag Generator v1 prompt
# Template placeholders: {count}, {subject}, {description}
TAG_GENERATOR_V1 = """Generate {count} YouTube search tags for a video.

TITLE: "{subject}"
DESCRIPTION:
<<<
{description}
>>>

RULES
- Lowercase, 1-4 words each, no # symbol
- Start with the most specific long-tail phrases viewers would search
- No duplicates

OUTPUT
Return only a JSON string array: ["tag one", "tag two"]"""

# Description Generator v1 prompt
# Template placeholders: {subject}, {bullets}
DESCRIPTION_GENERATOR_V1 = """Create a YouTube description for: "{subject}"
{bullets}
STRUCTURE
1. Hook (compelling first 2 lines, under 125 chars)
2. What viewers get
3. Content overview
4. CTA (like/subscribe/comment question)
5. 6 relevant hashtags

Make it engaging and conversational. Use emojis sparingly.
Do NOT include a title heading or "YouTube Description for" text.
Return the description text only, no JSON and no markdown fences."""
