"""Deterministic offline content used when the text model is unreachable."""

from banglamuse.categories import CategoryId

STYLE_PREFIX = "(কাস্টম স্টাইল অনুকরণ করা হয়েছে) "

FALLBACK_TEMPLATES: dict[CategoryId, str] = {
    CategoryId.MEMOIR: (
        "মনে পড়ে সেই পুরনো দিনের কথা... {topic} নিয়ে ভাবলে আজও মনটা কেমন যেন করে ওঠে। "
        "জানলার ধারে বসে বৃষ্টির শব্দ শুনতে শুনতে পুরনো স্মৃতির পাতায় ডুব দিলাম। "
        "সময় যেন থমকে গেছে সেই ধুলোমাখা বিকেলে।"
    ),
    CategoryId.POETRY: (
        "আকাশের নীল সীমানায়,\n"
        "খুঁজে ফিরি তোমার ছায়া।\n"
        "{topic} যেন এক অলীক স্বপ্ন,\n"
        "বুনছে মনে নতুন মায়া।\n"
        "বাতাসের কানে কানে,\n"
        "বলে যাই রূপকথা,\n"
        "হৃদয়ের গহীনে,\n"
        "জমে থাকা ব্যথা।"
    ),
    CategoryId.FICTION: (
        "গ্রামের শেষ প্রান্তে যে পুরনো বটগাছটি ছিল, তাকে ঘিরে অনেক গল্প প্রচলিত। "
        "একদিন বিকেলে, {topic} নিয়ে ভাবতে ভাবতে রফিক সেখানে গিয়ে বসলো। "
        "হঠাৎ দেখল এক অদ্ভুত ছায়া দীর্ঘ হয়ে তার দিকে এগিয়ে আসছে। "
        "বাতাসের শোঁ শোঁ শব্দে মনে হলো কেউ যেন ফিসফিস করে কিছু বলছে।"
    ),
    CategoryId.ARTICLE: (
        "বর্তমান সময়ে {topic} একটি অত্যন্ত গুরুত্বপূর্ণ বিষয়। "
        "এর প্রভাব আমাদের দৈনন্দিন জীবনে গভীরভাবে পরিলক্ষিত হয়। "
        "এ নিয়ে বিস্তারিত আলোচনা করা প্রয়োজন। "
        "সমাজ ও সংস্কৃতির বিবর্তনের সাথে সাথে এই বিষয়টি নতুন মাত্রা যোগ করেছে। "
        "আমাদের উচিত এ সম্পর্কে সচেতন হওয়া।"
    ),
}


def get_fallback_text(category: CategoryId | str, topic: str, has_style: bool) -> str:
    """Build the placeholder paragraph for a category.

    Args:
        category: Selected content category.
        topic: User topic, inserted verbatim.
        has_style: Whether a non-blank style sample was supplied.

    Returns:
        Fallback text, prefixed with a style notice when has_style is True.
    """
    template = FALLBACK_TEMPLATES.get(CategoryId(category), FALLBACK_TEMPLATES[CategoryId.ARTICLE])
    prefix = STYLE_PREFIX if has_style else ""
    # str.replace keeps braces in the topic intact
    return prefix + template.replace("{topic}", topic)
