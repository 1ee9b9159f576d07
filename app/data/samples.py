"""Sample listings for development databases."""

from app.models import BusinessCreate, BusinessDetails, SellerInfo

SAMPLE_BUSINESSES = [
    BusinessCreate(
        name="Mountain View Coffee Roasters",
        description=(
            "Established specialty coffee roastery with loyal customer base and multiple "
            "revenue streams including wholesale, retail, and online sales."
        ),
        location="Denver, Colorado",
        industry="Food & Beverage",
        asking_price=450_000,
        annual_revenue=380_000,
        cash_flow=95_000,
        ebitda=110_000,
        employees=8,
        year_established=2018,
        source_url="https://example.com/listing1",
        source_site="BizBuySell",
        seller_info=SellerInfo(
            contact_email="seller@example.com",
            broker_info="Mountain Business Brokers",
        ),
        business_details=BusinessDetails(
            owner_role="Owner/Operator",
            reason_for_selling="Retirement",
            training_provided="4 weeks included",
            real_estate_included=False,
            assets=["Equipment", "Inventory", "Customer Lists"],
        ),
    ),
    BusinessCreate(
        name="TechFix IT Services",
        description=(
            "Growing IT support and managed services company serving small to medium "
            "businesses in the metropolitan area."
        ),
        location="Austin, Texas",
        industry="Technology",
        asking_price=680_000,
        annual_revenue=520_000,
        cash_flow=145_000,
        ebitda=160_000,
        employees=12,
        year_established=2019,
        source_url="https://example.com/listing2",
        source_site="BizQuest",
        seller_info=SellerInfo(
            contact_email="owner@techfix.com",
            contact_phone="(555) 123-4567",
        ),
        business_details=BusinessDetails(
            owner_role="CEO",
            reason_for_selling="New Venture",
            training_provided="6 weeks included",
            real_estate_included=False,
            assets=["Equipment", "Client Contracts", "Software Licenses"],
        ),
    ),
    BusinessCreate(
        name="Sunshine Cleaning Solutions",
        description=(
            "Well-established commercial cleaning company with recurring contracts and "
            "strong reputation in healthcare and office sectors."
        ),
        location="Phoenix, Arizona",
        industry="Services",
        asking_price=295_000,
        annual_revenue=280_000,
        cash_flow=78_000,
        ebitda=85_000,
        employees=15,
        year_established=2016,
        source_url="https://example.com/listing3",
        source_site="BusinessesForSale",
        seller_info=SellerInfo(
            contact_email="info@sunshinecleaning.com",
            broker_info="Southwest Business Advisors",
        ),
        business_details=BusinessDetails(
            owner_role="Owner/Manager",
            reason_for_selling="Health Issues",
            training_provided="3 weeks included",
            real_estate_included=False,
            assets=["Equipment", "Vehicles", "Client Contracts"],
        ),
    ),
    BusinessCreate(
        name="Texas Logistics Hub",
        description=(
            "Strategic logistics and distribution center with prime Houston location "
            "and major corporate contracts."
        ),
        location="Houston, TX",
        industry="Logistics & Transportation",
        asking_price=1_100_000,
        annual_revenue=1_600_000,
        cash_flow=420_000,
        ebitda=420_000,
        employees=22,
        year_established=2012,
        source_url="https://example.com/listing4",
        source_site="BizBuySell",
    ),
]
