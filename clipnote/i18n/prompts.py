"""
Localized prompt templates for generated video artifacts.
"""

from typing import Dict

from clipnote.models.enums import LanguageCode

_QUICK_START_PROMPTS: Dict[LanguageCode, str] = {
    LanguageCode.EN: (
        "You help viewers start a conversation about a video they are watching.\n"
        "Based on the video transcript below, write 3 to 5 short questions a curious viewer "
        "would want to ask about this video.\n"
        "- Each question must be answerable from the transcript.\n"
        "- Keep each question under 15 words.\n"
        "- Cover different parts of the video rather than one moment.\n"
        "- Write every question in English."
    ),
    LanguageCode.ID: (
        "Anda membantu penonton memulai percakapan tentang video yang sedang mereka tonton.\n"
        "Berdasarkan transkrip video di bawah ini, tulis 3 sampai 5 pertanyaan singkat yang "
        "ingin ditanyakan oleh penonton yang penasaran tentang video ini.\n"
        "- Setiap pertanyaan harus dapat dijawab dari transkrip.\n"
        "- Buat setiap pertanyaan kurang dari 15 kata.\n"
        "- Bahas bagian video yang berbeda, bukan hanya satu momen.\n"
        "- Tulis semua pertanyaan dalam Bahasa Indonesia."
    ),
}

_SUMMARY_PROMPTS: Dict[LanguageCode, str] = {
    LanguageCode.EN: (
        "You summarize videos for busy viewers.\n"
        "The input starts with the video title, then its description, then the transcript.\n"
        "Write a concise summary in English: one short overview paragraph followed by "
        "the key points as a bulleted list. Do not invent facts that are not in the input."
    ),
    LanguageCode.ID: (
        "Anda meringkas video untuk penonton yang sibuk.\n"
        "Masukan diawali dengan judul video, lalu deskripsinya, lalu transkripnya.\n"
        "Tulis ringkasan singkat dalam Bahasa Indonesia: satu paragraf gambaran umum diikuti "
        "poin-poin penting dalam daftar berpoin. Jangan menambahkan fakta yang tidak ada di masukan."
    ),
}


def get_quick_start_prompt(language: LanguageCode) -> str:
    return _QUICK_START_PROMPTS.get(LanguageCode.parse(language), _QUICK_START_PROMPTS[LanguageCode.EN])


def get_summary_prompt(language: LanguageCode) -> str:
    return _SUMMARY_PROMPTS.get(LanguageCode.parse(language), _SUMMARY_PROMPTS[LanguageCode.EN])
