"""Known UK public-sector electricity supply frameworks.

Static reference data. Live status is derived at request time from Find a
Tender signals (see intelligence.py).
"""

from typing import Tuple

from ..models import FrameworkDefinition

TOTAL_FRAMEWORK_VALUE = "£52bn+"

FRAMEWORKS: Tuple[FrameworkDefinition, ...] = (
    FrameworkDefinition(
        id="ccs-rm6390",
        name="CCS Supply of Energy 3 (RM6390)",
        operator="Crown Commercial Service",
        reference="RM6390",
        description=(
            "The largest UK electricity supply framework: around 26 TWh of electricity and gas "
            "for 1,000+ customers and ~90,000 meters. Replaces RM6251."
        ),
        estimated_value="£51bn",
        expiry_date=None,
        next_procurement_window="2025-2026",
        relevance="Critical - a place on this framework opens central government and wider public sector call-offs.",
        action_required="Attend CCS market engagement events now and respond when the tender is published.",
        tier="critical",
        search_terms=["RM6390", "Supply of Energy 3", "RM6251", "CCS energy framework"],
    ),
    FrameworkDefinition(
        id="laser-y22009",
        name="LASER Flexible Electricity Framework (Y22009)",
        operator="LASER Energy (Kent County Council)",
        reference="Y22009",
        description=(
            "One of the largest public energy buying organisations, purchasing over £450m of energy "
            "a year for 200+ public sector customers. Permits Direct Award."
        ),
        estimated_value="£450m/year",
        expiry_date="2028-09-30",
        next_procurement_window="2027-2028",
        relevance="High - the Direct Award route means lower competition across 200+ customers.",
        action_required="Apply to join the framework and watch for lot extensions and new call-offs.",
        tier="critical",
        search_terms=["LASER energy", "Y22009", "LASER electricity", "Kent County Council energy"],
    ),
    FrameworkDefinition(
        id="nepo-electricity",
        name="NEPO Electricity Framework",
        operator="North East Procurement Organisation",
        reference="NEPO-ELEC",
        description=(
            "Electricity framework for North East local authorities, extended for a further two "
            "years, with a dedicated energy team."
        ),
        estimated_value="£200m+",
        expiry_date=None,
        next_procurement_window="2026-2027",
        relevance="High - North East coverage with a strong reference customer base.",
        action_required="Register on NEPO Open and monitor the portal for re-procurement.",
        tier="high",
        search_terms=["NEPO electricity", "NEPO energy", "North East Procurement Organisation energy"],
    ),
    FrameworkDefinition(
        id="tec-gen6",
        name="TEC 6th Generation Flexible Energy",
        operator="The Energy Consortium",
        reference="TEC-GEN6",
        description=(
            "144 higher-education members, 72% of UK universities. The current contract started "
            "in October 2024 with EDF and Corona Energy."
        ),
        estimated_value="£300m+",
        expiry_date="2026-09-30",
        next_procurement_window="2026",
        relevance="High - universities are strong reference customers with large combined volume.",
        action_required="Watch for the Gen 7 re-procurement and engage the TEC procurement team early.",
        tier="high",
        search_terms=["Energy Consortium", "TEC energy", "TEC electricity", "university energy framework"],
    ),
    FrameworkDefinition(
        id="pfh-energy",
        name="PfH Energy Framework",
        operator="Procurement for Housing",
        reference="PFH-ENERGY",
        description=(
            "Procurement partner for the social housing sector with 1,100+ members including "
            "housing associations, local authorities and ALMOs. Headquartered in the North West."
        ),
        estimated_value="£150m+",
        expiry_date=None,
        next_procurement_window="2026-2027",
        relevance="High - housing associations are a key buyer type and PfH is based in the North West.",
        action_required="Register with PfH and monitor Find a Tender for the framework re-procurement.",
        tier="high",
        search_terms=["Procurement for Housing energy", "PfH energy", "social housing energy"],
    ),
    FrameworkDefinition(
        id="ypo-energy",
        name="YPO Energy & Utilities",
        operator="Yorkshire Purchasing Organisation",
        reference="YPO-ENERGY",
        description="Yorkshire-based buying organisation working nationally on public sector energy and utilities.",
        estimated_value="£100m+",
        expiry_date=None,
        next_procurement_window=None,
        relevance="Medium - national reach that complements NEPO for northern coverage.",
        action_required="Monitor YPO for energy framework opportunities.",
        tier="medium",
        search_terms=["YPO energy", "Yorkshire Purchasing Organisation energy"],
    ),
    FrameworkDefinition(
        id="espo-energy",
        name="ESPO Energy (via LASER)",
        operator="Eastern Shires Purchasing Organisation",
        reference="ESPO-ENERGY",
        description=(
            "Owned by six county councils and currently buying energy through the LASER frameworks."
        ),
        estimated_value="£80m+",
        expiry_date=None,
        next_procurement_window=None,
        relevance="Medium - a place on LASER gives indirect access to ESPO customers.",
        action_required="Covered by LASER participation; watch for any independent procurement.",
        tier="medium",
        search_terms=["ESPO energy", "Eastern Shires energy"],
    ),
    FrameworkDefinition(
        id="nhs-centralised",
        name="NHS Centralised Energy Purchasing",
        operator="NHS England (via CCS)",
        reference="NHS-ENERGY",
        description=(
            "NHS trusts are standardising energy procurement, REGOs included, through CCS "
            "frameworks. Some trusts still procure independently."
        ),
        estimated_value="£500m+",
        expiry_date=None,
        next_procurement_window=None,
        relevance="Critical - high-value, high-volume customers partly covered by CCS RM6390.",
        action_required="Get on the CCS framework and watch for independent NHS trust tenders.",
        tier="critical",
        search_terms=["NHS energy", "NHS electricity", "NHS SBS energy"],
    ),
)
