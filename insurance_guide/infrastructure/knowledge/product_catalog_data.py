from __future__ import annotations

from insurance_guide.domain.entities.product import Product, ProductCategory


PRODUCTS: list[Product] = [
    Product(
        id="dental-basico",
        name="Adeslas Dental",
        category=ProductCategory.DENTAL,
        strong_point="Más de 40 servicios dentales gratuitos y franquicias muy reducidas en el resto.",
        features=(
            "Revisiones, limpiezas y radiografías incluidas sin coste.",
            "Red propia de clínicas dentales en toda España.",
            "Sin periodos de carencia en los servicios gratuitos.",
        ),
        advantages=(
            "Prima mensual muy asequible.",
            "Precios franquiciados conocidos de antemano.",
            "Compatible con cualquier seguro de salud.",
        ),
        limitations=(
            "Tratamientos complejos como implantes u ortodoncia tienen coste para el asegurado.",
            "Solo válido en la red concertada.",
        ),
        defense_arguments=(
            "Una sola limpieza anual fuera del seguro cuesta casi lo mismo que un año de prima.",
            "Los precios franquiciados suponen ahorros de hasta el 40% frente a tarifas privadas.",
        ),
        ideal_client=("Familias con niños", "Personas que quieren prevención dental a bajo coste"),
    ),
    Product(
        id="dental-max",
        name="Adeslas Dental Max",
        category=ProductCategory.DENTAL,
        strong_point="Incluye ortodoncia e implantes con descuentos máximos.",
        features=(
            "Todo lo incluido en Adeslas Dental.",
            "Ortodoncia infantil incluida.",
            "Implantes con precio franquiciado preferente.",
        ),
        advantages=(
            "Cobertura dental más completa del mercado.",
            "Ideal para tratamientos de larga duración.",
        ),
        limitations=("Prima más alta que el producto dental básico.",),
        defense_arguments=(
            "Un tratamiento de ortodoncia privado supera con creces el coste de varios años de póliza.",
        ),
        ideal_client=("Familias con hijos en edad de ortodoncia",),
    ),
    Product(
        id="go",
        name="Adeslas GO",
        category=ProductCategory.AMBULATORY,
        strong_point="Consultas y pruebas diagnósticas sin copagos a un precio contenido.",
        features=(
            "Medicina general, pediatría y especialistas.",
            "Pruebas diagnósticas básicas y de alta tecnología.",
            "Urgencias ambulatorias.",
        ),
        advantages=(
            "Acceso directo a especialistas sin pasar por el médico de familia.",
            "Sin copagos.",
        ),
        limitations=(
            "No incluye hospitalización ni intervenciones quirúrgicas.",
        ),
        defense_arguments=(
            "Evita listas de espera para especialistas y pruebas en la sanidad pública.",
            "Perder la póliza supone volver a pasar periodos de carencia si se contrata más adelante.",
        ),
        ideal_client=("Jóvenes sanos", "Personas que buscan rapidez en el diagnóstico"),
    ),
    Product(
        id="plena-plus",
        name="Adeslas Plena Plus",
        category=ProductCategory.HOSPITAL,
        strong_point="Cobertura completa con hospitalización y sin copagos.",
        features=(
            "Asistencia primaria, especialistas y urgencias.",
            "Hospitalización médica y quirúrgica.",
            "Segunda opinión médica y asistencia en viaje.",
        ),
        advantages=(
            "La cobertura más amplia de la gama de salud.",
            "Sin copagos en ningún servicio.",
        ),
        limitations=(
            "Prima más elevada que los productos con copago.",
            "Periodos de carencia en partos e intervenciones programadas.",
        ),
        defense_arguments=(
            "Una sola intervención quirúrgica privada puede superar el coste de varios años de póliza.",
            "La antigüedad acumulada elimina carencias que habría que volver a cumplir en otra compañía.",
        ),
        ideal_client=("Familias", "Personas que buscan tranquilidad total"),
    ),
    Product(
        id="plena-vital",
        name="Adeslas Plena Vital",
        category=ProductCategory.HOSPITAL,
        strong_point="Cobertura completa con copagos reducidos y prima ajustada.",
        features=(
            "Mismo cuadro médico que Plena Plus.",
            "Hospitalización incluida.",
        ),
        advantages=("Prima inferior a la de Plena Plus.",),
        limitations=("Copagos por acto médico.",),
        defense_arguments=(
            "Si el uso es moderado, los copagos suman menos que la diferencia de prima con otros productos.",
        ),
    ),
    Product(
        id="mybox-salud",
        name="MyBox Salud",
        category=ProductCategory.MYBOX,
        strong_point="Seguro de salud digital con contratación y gestión 100% online.",
        features=(
            "Videoconsulta 24 horas.",
            "Cuadro médico completo.",
            "Gestión de autorizaciones desde la app.",
        ),
        advantages=(
            "Precio competitivo para perfiles digitales.",
            "Sin papeles.",
        ),
        limitations=("Atención comercial exclusivamente digital.",),
        defense_arguments=(
            "La videoconsulta resuelve la mayoría de dudas sin desplazamientos.",
        ),
        ideal_client=("Profesionales jóvenes", "Usuarios habituales de apps"),
    ),
    Product(
        id="pymes",
        name="Adeslas Pymes",
        category=ProductCategory.BUSINESS,
        strong_point="Seguro colectivo con ventajas fiscales para empresa y empleados.",
        features=(
            "Desde 2 asegurados.",
            "Cobertura completa con o sin copagos.",
        ),
        advantages=(
            "Retribución flexible exenta de tributación hasta el límite legal.",
            "Mejora la retención del talento.",
        ),
        limitations=("Requiere un mínimo de asegurados.",),
        defense_arguments=(
            "Cancelar supone perder la ventaja fiscal y un beneficio muy valorado por la plantilla.",
        ),
        ideal_client=("Pequeñas y medianas empresas", "Autónomos con empleados"),
    ),
]
