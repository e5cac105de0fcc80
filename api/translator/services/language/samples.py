"""Reference sample paragraphs used to seed the language profiles."""

import logging
from typing import Dict, List

from translator.services.language.classifier import LanguageClassifier

logger = logging.getLogger(__name__)

REFERENCE_SAMPLES: Dict[str, str] = {
    "en": (
        "The quick brown fox jumps over the lazy dog. This is a common pangram "
        "used to display all letters of the alphabet. English is a West Germanic "
        "language that was first spoken in early medieval England and is now the "
        "most widely used language in the world."
    ),
    "pt": (
        "A rápida raposa marrom salta sobre o cão preguiçoso. Este é um pangrama "
        "comum usado para exibir todas as letras do alfabeto. O português é uma "
        "língua românica originária da Galiza e do norte de Portugal, e é a "
        "língua oficial de Portugal, Brasil, Angola, Moçambique, Cabo Verde, "
        "Guiné-Bissau, São Tomé e Príncipe e Timor-Leste."
    ),
    "es": (
        "El rápido zorro marrón salta sobre el perro perezoso. Este es un "
        "pangrama común utilizado para mostrar todas as letras do alfabeto. El "
        "español es una lengua romance, derivada del latín vulgar, que se habla "
        "principalmente en España y América Latina."
    ),
    "fr": (
        "Le rapide renard brun saute par-dessus le chien paresseux. Ceci é um "
        "pangramme courant utilizado para exibir todas as letras do alfabeto. Le "
        "français est une langue romane parlée principalmente en France, au "
        "Canada, en Belgique, en Suisse e dans de nombreux pays africains."
    ),
}


def seed_reference_profiles(
    classifier: LanguageClassifier, overwrite: bool = False
) -> List[str]:
    """Store the reference profiles through ``classifier``.

    Args:
        classifier: Classifier whose store and catalog receive the profiles
        overwrite: Replace profiles that are already loaded

    Returns:
        Language codes that were written

    Raises:
        StoreError: If the store rejects one of the writes. Profiles written
            before the failure stay written.
    """
    written = []
    for lang_code, sample in REFERENCE_SAMPLES.items():
        if not overwrite and classifier.get_profile(lang_code) is not None:
            continue
        classifier.upsert_profile(lang_code, sample)
        written.append(lang_code)

    if written:
        logger.info(f"Seeded reference language profiles: {', '.join(written)}")
    return written
