"""Regime calculators.

All calculators are stateless apart from the reference data injected at
construction, and safe to share between threads.
"""

from pj_regime_analyzer.core.calculators.simples_nacional import (
    SimplesNacionalCalculator,
    calcular_fator_r,
    calcular_simples_nacional,
)
from pj_regime_analyzer.core.calculators.lucro_presumido import (
    LucroPresumidoCalculator,
    calcular_irpj_trimestral,
    calcular_lucro_presumido,
)
from pj_regime_analyzer.core.calculators.lucro_real import (
    LucroRealCalculator,
    calcular_creditos_potenciais,
    calcular_lucro_real,
    obrigatorio_lucro_real,
)
from pj_regime_analyzer.core.calculators.monthly_evolution import (
    MonthlyEvolutionCalculator,
    calcular_evolucao_mensal,
    rbt12_no_mes,
)

__all__ = [
    "SimplesNacionalCalculator",
    "calcular_fator_r",
    "calcular_simples_nacional",
    "LucroPresumidoCalculator",
    "calcular_irpj_trimestral",
    "calcular_lucro_presumido",
    "LucroRealCalculator",
    "calcular_creditos_potenciais",
    "calcular_lucro_real",
    "obrigatorio_lucro_real",
    "MonthlyEvolutionCalculator",
    "calcular_evolucao_mensal",
    "rbt12_no_mes",
]
