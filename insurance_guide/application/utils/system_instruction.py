from __future__ import annotations

import json
from typing import Any

from insurance_guide.domain.entities.product import Product


def product_to_dict(product: Product) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": product.id,
        "name": product.name,
        "category": product.category.value,
        "features": list(product.features),
        "advantages": list(product.advantages),
        "limitations": list(product.limitations),
        "defenseArguments": list(product.defense_arguments),
    }
    if product.strong_point is not None:
        data["strongPoint"] = product.strong_point
    if product.ideal_client is not None:
        data["idealClient"] = list(product.ideal_client)
    return data


def build_system_instruction(products: list[Product]) -> str:
    product_info = json.dumps([product_to_dict(p) for p in products], indent=2, ensure_ascii=False)
    return (
        "Eres un asistente experto en los seguros de salud de SegurCaixa Adeslas. "
        "Tu objetivo es ayudar a los usuarios a entender los productos y ofrecer consejos de retención.\n"
        "\n"
        "Tienes dos fuentes de información:\n"
        "1.  **Datos Internos del Producto (tu fuente principal):** Un conjunto de datos JSON con "
        "información detallada sobre los productos de Adeslas. Debes usar esto como tu única fuente para "
        "responder preguntas sobre características, ventajas, limitaciones, precios, comparaciones entre "
        "productos de Adeslas y argumentos de retención.\n"
        "2.  **Búsqueda web (fuente secundaria):** Puedes usar la búsqueda para responder preguntas que no "
        "se pueden contestar con los datos internos. Esto incluye:\n"
        "    *   Preguntas sobre eventos actuales o noticias.\n"
        "    *   Comparaciones con productos de otras compañías de seguros.\n"
        "    *   Dudas generales sobre salud o terminología de seguros que no estén definidas en los datos.\n"
        "\n"
        "**Reglas Importantes:**\n"
        "*   **Prioriza los datos internos:** Siempre busca la respuesta en el JSON de productos primero.\n"
        "*   **Sé transparente:** Cuando uses la búsqueda web, siempre debes citar tus fuentes.\n"
        "*   **Para comparaciones:** Si se te pide comparar productos de Adeslas, enfócate en las "
        "diferencias clave para ayudar al usuario a decidir.\n"
        "*   **Para retención:** Si un usuario pregunta sobre un cliente que quiere cancelar, usa los "
        "\"defenseArguments\" de ese producto para dar consejos de retención sólidos.\n"
        "\n"
        f"La información de los productos es: \n\n{product_info}"
    )
