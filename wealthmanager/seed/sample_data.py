from __future__ import annotations

from wealthmanager.models.schemas import SampleData


def _holding(symbol, name, quantity, avg_price, current_price, sector, value, gain_loss, gain_loss_percent):
    return {
        "symbol": symbol,
        "name": name,
        "quantity": quantity,
        "avgPrice": avg_price,
        "currentPrice": current_price,
        "sector": sector,
        "marketCap": "Large",
        "value": value,
        "gainLoss": gain_loss,
        "gainLossPercent": gain_loss_percent,
    }


SAMPLE_HOLDINGS = [
    _holding("RELIANCE", "Reliance Industries Ltd", 50, 2450, 2680.5, "Energy", 134025, 11525, 9.39),
    _holding("INFY", "Infosys Limited", 100, 1800, 2010.75, "Technology", 201075, 21075, 11.71),
    _holding("TCS", "Tata Consultan", 75, 3200, 3450.25, "Technology", 258768.8, 18768.75, 7.82),
    _holding("HDFCBANK", "HDFC Bank Limited", 80, 1650, 1580.3, "Banking", 126424, -5576, -4.22),
    _holding("ICICIBANK", "ICICI Bank Limited", 60, 1100, 1235.8, "Banking", 74148, 8148, 12.34),
    _holding("BHARTIARTL", "Bharti Airtel Limited", 120, 850, 920.45, "Telecommunications", 110454, 8454, 8.28),
    _holding("ITC", "ITC Limited", 200, 420, 465.2, "Consumer Goods", 93040, 9040, 10.76),
    _holding("BAJFINANCE", "Bajaj Finance Limited", 25, 6800, 7150.6, "Financial Services", 178765, 8765, 5.15),
    _holding("ASIANPAINT", "Asian Paints Limited", 40, 3100, 2890.75, "Consumer Discretionary", 115630, -8370, -6.75),
    _holding("MARUTI", "Maruti Suzuki India Limited", 30, 9500, 10250.3, "Automotive", 307509, 22509, 7.90),
    _holding("WIPRO", "Wipro Limited", 150, 450, 485.6, "Technology", 72840, 5340, 7.91),
    _holding("TATAMOTORS", "Tata Motors Limited", 100, 650, 720.85, "Automotive", 72085, 7085, 10.90),
    _holding("TECHM", "Tech Mahindra Limited", 80, 1200, 1145.3, "Technology", 91624, -4380, -4.56),
    _holding("AXISBANK", "Axis Bank Limited", 90, 980, 1055.4, "Banking", 94986, 6786, 7.69),
    # Only the position value was published for SUNPHARMA; price and gain are backed out of it.
    _holding(
        "SUNPHARMA",
        "Sun Pharmaceutical Industries",
        80,
        1150,
        933.975,
        "Healthcare",
        74718,
        (933.975 - 1150) * 80,
        ((933.975 - 1150) / 1150) * 100,
    ),
]

SAMPLE_ALLOCATION = {
    "bySector": [
        {"name": "Technology", "value": 624303.75, "percentage": 32.25},
        {"name": "Automotive", "value": 379594, "percentage": 19.61},
        {"name": "Banking", "value": 295558, "percentage": 15.27},
        {"name": "Financial Services", "value": 178765, "percentage": 9.24},
        {"name": "Energy", "value": 134025, "percentage": 6.92},
        {"name": "Consumer Discretionary", "value": 115630, "percentage": 5.97},
        {"name": "Telecommunications", "value": 110454, "percentage": 5.71},
        {"name": "Consumer Goods", "value": 93040, "percentage": 4.81},
        {"name": "Healthcare", "value": 74718, "percentage": 3.86},
    ],
    "byMarketCap": [
        {"name": "Large Cap", "value": 1935097.75, "percentage": 100.00},
        {"name": "Mid Cap", "value": 0, "percentage": 0.00},
        {"name": "Small Cap", "value": 0, "percentage": 0.00},
    ],
}

SAMPLE_PERFORMANCE = {
    "timeline": [
        {"date": "2024-01-01", "portfolio": 1500000, "nifty50": 21000, "gold": 62000},
        {"date": "2024-02-01", "portfolio": 1520000, "nifty50": 21300, "gold": 61800},
        {"date": "2024-03-01", "portfolio": 1540000, "nifty50": 22100, "gold": 64500},
        {"date": "2024-04-01", "portfolio": 1580000, "nifty50": 22800, "gold": 66200},
        {"date": "2024-05-01", "portfolio": 1620000, "nifty50": 23200, "gold": 68000},
        {"date": "2024-06-01", "portfolio": 1650000, "nifty50": 23500, "gold": 68500},
        {"date": "2024-07-01", "portfolio": 1680000, "nifty50": 24100, "gold": 69800},
        {"date": "2024-08-01", "portfolio": 1720000, "nifty50": 24500, "gold": 70500},
        {"date": "2024-09-01", "portfolio": 1750000, "nifty50": 25000, "gold": 71500},
        {"date": "2024-10-01", "portfolio": 1780000, "nifty50": 25600, "gold": 72800},
        {"date": "2024-11-01", "portfolio": 1820000, "nifty50": 26100, "gold": 74000},
        {"date": "2024-12-01", "portfolio": 1850000, "nifty50": 26500, "gold": 75200},
    ],
    "returns": {
        "portfolio": {"1month": 2.3, "3months": 8.1, "1year": 15.7},
        "nifty50": {"1month": 1.8, "3months": 6.2, "1year": 12.4},
        "gold": {"1month": -0.5, "3months": 4.1, "1year": 8.9},
    },
}

SAMPLE_SUMMARY = {
    "totalValue": 1935097.75,
    "totalInvested": 1740000.00,
    "totalGainLoss": 195097.75,
    "totalGainLossPercent": 11.21,
    "topPerformer": {"symbol": "ICICIBANK", "name": "ICICI Bank Limited", "gainPercent": 12.34},
    "worstPerformer": {"symbol": "ASIANPAINT", "name": "Asian Paints Limited", "gainPercent": -6.75},
    "diversificationScore": 8.2,
    "riskLevel": "Moderate",
}


def load_sample_data() -> SampleData:
    return SampleData.model_validate(
        {
            "holdings": SAMPLE_HOLDINGS,
            "allocation": SAMPLE_ALLOCATION,
            "performance": SAMPLE_PERFORMANCE,
            "summary": SAMPLE_SUMMARY,
        }
    )
