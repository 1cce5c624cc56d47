# i18n.py
import locale

MESSAGES = {
    "en": {
        "config_error": "Configuration error: {error}",
        "loading_videos": "Loading videos (page {page})...",
        "loading_video": "Loading video '{video_id}'...",
        "searching": "Searching for '{query}'...",
        "loading_channels": "Loading channels (page {page})...",
        "loading_channel": "Loading channel '{channel_id}'...",
        "loading_channel_videos": "Loading videos of channel '{channel_id}' (page {page})...",
        "loading_playlists": "Loading playlists (page {page})...",
        "reporting_progress": "Reporting position {position}s for '{video_id}'...",
        "progress_reported": "Watch progress of '{video_id}' saved at {position}s.",
        "nothing_found": "Nothing found.",
        "watched": "watched",
        "column_id": "ID",
        "column_title": "Title",
        "column_channel": "Channel",
        "column_duration": "Duration",
        "column_published": "Published",
        "column_name": "Name",
        "column_subscribers": "Subscribers",
        "column_views": "Views",
        "label_stream": "Stream",
        "label_thumbnail": "Thumbnail",
        "label_channel_thumbnail": "Channel thumbnail",
        "help_config": "YAML file holding base_url and token.",
        "help_lang": "Set the language for output messages (e.g., 'en' or 'fr').",
        "help_verbose": "Log HTTP requests and other debug details.",
        "help_page": "Page number, starting at 1.",
        "help_page_size": "Number of items per page.",
        "help_video_id": "YouTube id of the video.",
        "help_channel_id": "YouTube id of the channel.",
        "help_query": "Text to search for.",
        "help_position": "Playback position in seconds.",
    },
    "fr": {
        "config_error": "Erreur de configuration : {error}",
        "loading_videos": "Chargement des vidéos (page {page})...",
        "loading_video": "Chargement de la vidéo '{video_id}'...",
        "searching": "Recherche de '{query}'...",
        "loading_channels": "Chargement des chaînes (page {page})...",
        "loading_channel": "Chargement de la chaîne '{channel_id}'...",
        "loading_channel_videos": "Chargement des vidéos de la chaîne '{channel_id}' (page {page})...",
        "loading_playlists": "Chargement des playlists (page {page})...",
        "reporting_progress": "Envoi de la position {position}s pour '{video_id}'...",
        "progress_reported": "Progression de '{video_id}' enregistrée à {position}s.",
        "nothing_found": "Aucun résultat.",
        "watched": "vue",
        "column_id": "ID",
        "column_title": "Titre",
        "column_channel": "Chaîne",
        "column_duration": "Durée",
        "column_published": "Publiée",
        "column_name": "Nom",
        "column_subscribers": "Abonnés",
        "column_views": "Vues",
        "label_stream": "Flux",
        "label_thumbnail": "Miniature",
        "label_channel_thumbnail": "Miniature de la chaîne",
        "help_config": "Fichier YAML contenant base_url et token.",
        "help_lang": "Définit la langue des messages de sortie (ex: 'en' ou 'fr').",
        "help_verbose": "Journalise les requêtes HTTP et les détails de débogage.",
        "help_page": "Numéro de page, à partir de 1.",
        "help_page_size": "Nombre d'éléments par page.",
        "help_video_id": "Identifiant YouTube de la vidéo.",
        "help_channel_id": "Identifiant YouTube de la chaîne.",
        "help_query": "Texte à rechercher.",
        "help_position": "Position de lecture en secondes.",
    },
}

_current_lang = "en"


def get_default_lang():
    try:
        lang_code, _ = locale.getlocale()
        return "fr" if lang_code and lang_code.lower().startswith("fr") else "en"
    except (ValueError, TypeError):
        return "en"


def set_lang(lang: str):
    global _current_lang
    _current_lang = lang if lang in MESSAGES else "en"


def get_message(key, **kwargs):
    lang = _current_lang
    if lang not in MESSAGES or key not in MESSAGES[lang]:
        # Fallback to English if key not found in current language
        lang = "en"

    message_template = MESSAGES[lang].get(key, f"Translation missing for key: {key}")

    try:
        return message_template.format(**kwargs)
    except KeyError as e:
        return f"Formatting error for key '{key}': missing placeholder {e}"
